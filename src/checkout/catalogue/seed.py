"""Sample catalogue used by ``POST /products/seed`` and ``manage.py seed-products``."""

_CONVERSE_IMAGE = (
    "https://www.converse.in/media/catalog/product/1/6/162050c_a_107x1.jpg"
    "?auto=webp&format=pjpg&width=640&height=800&fit=cover"
)

SAMPLE_PRODUCTS = [
    {
        "name": "Converse Chuck Taylor All Star II Hi",
        "description": (
            "The iconic Chuck Taylor All Star returns with premium materials and enhanced comfort. "
            "Features a lugged outsole, padded non-slip tongue, and micro-suede lining for all-day comfort."
        ),
        "price": 75.00,
        "image": _CONVERSE_IMAGE,
        "inventory": 50,
        "variants": [
            {
                "name": "color",
                "value": "Color",
                "options": [
                    {"label": "Black", "value": "black", "in_stock": True, "image": _CONVERSE_IMAGE},
                    {
                        "label": "White",
                        "value": "white",
                        "in_stock": True,
                        "image": "https://www.converse.in/media/catalog/product/1/3/132169c_a_08x1.jpg"
                        "?auto=webp&format=pjpg&width=640&height=800&fit=cover",
                    },
                    {
                        "label": "Red",
                        "value": "red",
                        "in_stock": True,
                        "image": "https://www.converse.in/media/catalog/product/m/9/m9621c_01.jpg"
                        "?auto=webp&format=pjpg&width=640&height=800&fit=cover",
                    },
                    {
                        "label": "Navy",
                        "value": "navy",
                        "in_stock": False,
                        "image": "https://www.converse.in/media/catalog/product/a/0/a07434c_a_107x1.jpg"
                        "?auto=webp&format=pjpg&width=640&height=800&fit=cover",
                    },
                ],
            },
            {
                "name": "size",
                "value": "Size",
                "options": [
                    {"label": "7", "value": "7", "in_stock": True},
                    {"label": "8", "value": "8", "in_stock": True},
                    {"label": "9", "value": "9", "in_stock": True},
                    {"label": "10", "value": "10", "in_stock": True},
                    {"label": "11", "value": "11", "in_stock": False},
                ],
            },
        ],
    }
]
