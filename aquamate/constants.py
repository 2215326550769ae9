"""
Shared constants used across the application.

This module contains constants that need to be consistent across
different parts of the application (storage keys, forms, validation, etc.).
"""

# Device storage keys. These are whole-value entries; changing a key orphans
# whatever was saved under the old one.
REMINDERS_STORAGE_KEY = "aquamate_reminders_v1"
PROFILE_STORAGE_KEY = "cachedProfile"
SESSION_STORAGE_KEY = "userSession"

# Image styles offered by the add-plant form
PLANT_IMAGE_STYLES = [
    ("PlantExample", "Plant 1"),
    ("PlantExample2", "Plant 2"),
    ("PlantExample3", "Plant 3"),
]

# Status options offered by the add-plant form.
# "In days" is replaced by the computed next-watering text on save.
PLANT_STATUSES = [
    ("Hydrated", "Hydrated"),
    ("In days", "In X days"),
    ("Water now!", "Water now!"),
]
PLANT_STATUS_IN_DAYS = "In days"

# Profile fields persisted under PROFILE_STORAGE_KEY
PROFILE_FIELDS = ("fullName", "userName", "email", "age", "plantsCount")

# Label used when a reminder has no (or a dangling) plant reference
GENERAL_PLANT_LABEL = "General"

# Cards shown in "Today's care" when nothing is due today
TODAY_PLACEHOLDER_CARDS = [
    {"title": "Water", "subtitle": "No reminders today"},
    {"title": "Fertilize", "subtitle": "Monthly"},
    {"title": "Inspect", "subtitle": "Check leaves"},
]

GREETING_TEXT = "We have all the information about the plant you need."

CARE_TIP = {
    "title": "Did you know?",
    "body": "Keeping a regular watering schedule helps your plants grow healthier and stronger.",
}

PLANT_CARE_TIPS = (
    "Keep the soil slightly moist and avoid overwatering. Make sure the plant gets "
    "indirect light and adjust watering frequency based on the season."
)
