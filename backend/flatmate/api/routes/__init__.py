from flatmate.api.routes import audit, contact, listings, profile, saved

__all__ = [
    "listings",
    "contact",
    "saved",
    "profile",
    "audit",
]
