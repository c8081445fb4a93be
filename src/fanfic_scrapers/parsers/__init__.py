"""Site-specific listing parsers."""

from fanfic_scrapers.parsers.ao3 import Ao3ListingParser
from fanfic_scrapers.parsers.ffnet import FanFictionNetListingParser

__all__ = [
    "Ao3ListingParser",
    "FanFictionNetListingParser",
]
