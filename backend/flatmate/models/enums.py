import enum


class GenderPreference(str, enum.Enum):
    male = "male"
    female = "female"
    any = "any"


class Amenity(str, enum.Enum):
    wifi = "wifi"
    ac = "ac"
    kitchen = "kitchen"
    laundry = "laundry"
    parking = "parking"
    furnished = "furnished"


class ContactChannel(str, enum.Enum):
    whatsapp = "whatsapp"
    sms = "sms"
