"""Mixed checkout workload scenario.

Combines the checkout journeys with weights that model realistic
storefront traffic. This is the recommended scenario for load baseline
testing.
"""

from locust import HttpUser, between

from loadtests.scenarios.checkout import BrowseAndBuyJourney, CheckoutJourney


class MixedWorkloadUser(HttpUser):
    """Realistic mixed workload simulating concurrent storefront activity.

    Weight distribution:

    - Browse and buy (60%): shoppers reading the catalogue and buying
      single units from shared products, which contends on stock.
    - Full checkout (40%): order submission with every payment outcome
      followed by notification dispatch.
    """

    wait_time = between(0.5, 3.0)
    tasks = {
        BrowseAndBuyJourney: 6,
        CheckoutJourney: 4,
    }
