"""Shop taxi dispatch simulator.

Shops double as taxi ranks. A client's call is matched to the nearest
taxi and the nearest shop of the requested company over a directed road
network, then priced with that company's tariff.
"""

__version__ = "0.1.0"
