"""ShipBridge: carrier-neutral shipping integrations.

Translates a carrier-neutral shipment model into carrier request payloads
and normalizes carrier responses into rates, labels, and void outcomes.

Every public build/parse operation returns the two-variant Result wrapper
from :mod:`shipbridge.result`; expected failures never raise.
"""

__version__ = "0.1.0"
