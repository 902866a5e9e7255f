"""
Rate limiting configuration using slowapi.

Three tiers:
  • strict  – 10/min (opening a new booking wizard)
  • submit  – 5/min  (booking details submission)
  • default – 60/min (everything else)

The limiter keys on client IP by default.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

# Named rate strings for use in @limiter.limit() decorators
STRICT = "10/minute"    # wizard creation
SUBMIT = "5/minute"     # booking submission
DEFAULT = "60/minute"   # general API

limiter = Limiter(key_func=get_remote_address, default_limits=[DEFAULT])
