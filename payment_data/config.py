# config.py
# All the knobs live here so you can tune the payment table
# without digging through the generator code.

from dataclasses import dataclass

@dataclass
class Config:
    # Core dataset size and window
    seed: int = 20190729          # reproducible runs
    n_entities: int = 4460        # customer ids 1..n_entities
    start: str = "2018-01-01"     # first month of the time axis
    end: str   = "2018-12-31"     # last day of the time axis (month starts up to here)

    # Outcome: share of customer-months with a payment
    outcome_probability: float = 0.90

    # Payment source options, drawn uniformly for "yes" rows
    detail_options: tuple = None

    # Customers kept after dropout (the rest go missing from every month)
    n_retained: int = 4400

    # Row layout: "entity" keeps each customer's months together,
    # "period" repeats the whole customer range once per month
    order: str = "entity"

    def __post_init__(self):
        if self.detail_options is None:
            self.detail_options = ("bank transfer", "check", "credit card")
