from app.db.models.listing import Listing, ListingCategory, ListingCondition, ListingStatus
from app.db.models.user import User

__all__ = ["User", "Listing", "ListingCategory", "ListingCondition", "ListingStatus"]
