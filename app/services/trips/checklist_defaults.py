from typing import List
from app.schemas.trip.checklist import ChecklistCategory, ChecklistItem

DEFAULT_CHECKLIST = [
    ("documents", "Travel Documents & Money", [
        ("passport", "Passport / Visa"),
        ("insurance", "Travel Insurance"),
        ("cards", "Cash / Credit Cards"),
        ("license", "Driver's License / ID"),
        ("tickets", "Flight Tickets / Boarding Pass"),
        ("reservations", "Hotel & Trip Reservations"),
        ("emergency", "Emergency Contacts"),
    ]),
    ("clothing", "Clothing & Personal Items", [
        ("clothing", "Clothing appropriate for destination/weather"),
        ("shoes", "Comfortable shoes / flip-flops / sandals"),
        ("pajamas", "Pajamas / sleepwear"),
        ("swimwear", "Swimwear (if needed)"),
        ("sunprotection", "Sunglasses / Hat / Sun Protection"),
        ("rain", "Umbrella / Raincoat (if needed)"),
    ]),
    ("health", "Health & Safety", [
        ("prescriptions", "Prescription medications"),
        ("otc", "Over-the-counter medications (painkillers, antihistamines, etc.)"),
        ("firstaid", "First Aid items (band-aids, antiseptic wipes)"),
        ("sanitizer", "Face masks / hand sanitizer"),
        ("vaccination", "Vaccination certificates (if required)"),
    ]),
    ("electronics", "Electronics & Accessories", [
        ("phone", "Mobile phone & charger"),
        ("laptop", "Laptop / Tablet & charger"),
        ("powerbank", "Power bank"),
        ("adapters", "Travel adapters / converters"),
        ("headphones", "Headphones / Earplugs"),
        ("camera", "Camera & accessories"),
    ]),
    ("toiletries", "Toiletries & Personal Care", [
        ("toothbrush", "Toothbrush & Toothpaste"),
        ("shampoo", "Shampoo / Conditioner"),
        ("soap", "Soap / Body Wash"),
        ("deodorant", "Deodorant"),
        ("hairbrush", "Hairbrush / Comb"),
        ("razor", "Razor / Shaving kit"),
        ("skincare", "Skincare products / lotion"),
        ("makeup", "Makeup / Cosmetics (if needed)"),
    ]),
    ("comfort", "Travel Comfort & Extras", [
        ("snacks", "Snacks / Water bottle"),
        ("pillow", "Travel pillow / blanket"),
        ("entertainment", "Books / Magazines / Entertainment"),
        ("backpack", "Small backpack / carry-on bag"),
        ("maps", "Maps / Travel guides"),
        ("sportsgear", "Sports / activity gear (hiking, snorkeling, skiing)"),
        ("gifts", "Gifts or souvenirs"),
        ("language", "Language guide / translation app"),
    ]),
]


def default_checklist() -> List[ChecklistCategory]:
    """Fresh copy of the packing checklist new trips start with."""
    return [
        ChecklistCategory(
            id=category_id,
            name=name,
            items=[ChecklistItem(id=item_id, label=label) for item_id, label in items],
        )
        for category_id, name, items in DEFAULT_CHECKLIST
    ]
