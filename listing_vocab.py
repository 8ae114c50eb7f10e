"""Static tables for listing synthesis (Nigerian furniture market).

Prices are NGN. Dimensions are cm, (min, max) inclusive per axis.
"""

CURRENCY = "NGN"
DIMENSION_UNIT = "cm"

# Cities with furniture market presence
NIGERIAN_CITIES = [
    "Lagos", "Port Harcourt", "Abuja", "Ibadan", "Kano",
    "Enugu", "Aba", "Onitsha", "Kaduna", "Warri",
    "Benin City", "Jos", "Abeokuta", "Akure", "Owerri",
]

# (condition, weight)
CONDITION_WEIGHTS = [
    ("new", 0.60),
    ("excellent", 0.25),
    ("good", 0.10),
    ("fair", 0.05),
]

CONDITION_MULTIPLIERS = {
    "new": 1.00,
    "excellent": 0.85,
    "good": 0.65,
    "fair": 0.45,
}

PRICE_ROUNDING = 1000

PRICE_RANGES = {
    "sofa": (45000, 350000),
    "dining-table": (55000, 280000),
    "bed": (38000, 185000),
    "wardrobe": (52000, 220000),
    "desk": (28000, 125000),
    "outdoor": (65000, 250000),
    "storage": (22000, 95000),
    "chair": (15000, 85000),
    "coffee-table": (18000, 78000),
    "entertainment": (25000, 110000),
}
DEFAULT_PRICE_RANGE = (20000, 150000)

MATERIALS_BY_CATEGORY = {
    "sofa": ["leather", "fabric", "velvet", "suede", "microfiber"],
    "dining-table": ["wood", "mahogany", "iroko", "oak", "glass", "marble"],
    "bed": ["wood", "metal", "upholstered", "leather", "velvet"],
    "wardrobe": ["wood", "plywood", "MDF", "solid wood", "laminate"],
    "desk": ["wood", "metal", "glass", "engineered wood"],
    "outdoor": ["wicker", "rattan", "teak", "aluminum", "plastic"],
    "storage": ["wood", "metal", "bamboo", "MDF"],
    "chair": ["wood", "metal", "fabric", "leather", "plastic"],
    "coffee-table": ["wood", "glass", "metal", "marble", "acrylic"],
    "entertainment": ["wood", "MDF", "glass", "metal"],
}
DEFAULT_MATERIALS = ["wood", "metal"]

TITLE_TEMPLATES = {
    "sofa": [
        "{adj} {material} {seater}-Seater Sofa",
        "Modern {material} {style} Sofa",
        "{adj} L-Shaped {material} Sectional",
        "Contemporary {material} Loveseat",
    ],
    "dining-table": [
        "{adj} {material} Dining Table ({seats} Seater)",
        "{material} {style} Dining Set",
        "Executive {material} Dining Table",
        "Round {material} Dining Table",
    ],
    "bed": [
        "{size} {material} Bed Frame",
        "{adj} {material} Platform Bed",
        "{material} {style} Bed with Storage",
        "Upholstered {size} Bed",
    ],
    "wardrobe": [
        "{doors}-Door {material} Wardrobe",
        "{adj} Sliding Wardrobe",
        "{material} {style} Armoire",
        "Walk-in Closet System",
    ],
    "desk": [
        "{adj} {material} Office Desk",
        "Executive {material} Writing Desk",
        "{style} Study Table",
        "Computer Desk with Storage",
    ],
    "outdoor": [
        "{material} Patio Set ({pieces}-Piece)",
        "{adj} Garden Furniture Set",
        "Outdoor Dining Set",
        "{material} Lounge Chair",
    ],
    "storage": [
        "{adj} {material} Bookshelf",
        "{shelves}-Tier Display Cabinet",
        "Storage Unit with Drawers",
        "{material} {style} Bookcase",
    ],
    "chair": [
        "{adj} {material} Accent Chair",
        "{style} Dining Chair (Set of {qty})",
        "Executive Office Chair",
        "{material} Recliner",
    ],
    "coffee-table": [
        "{adj} {material} Coffee Table",
        "{shape} {material} Side Table",
        "Nesting Tables (Set of {qty})",
        "{material} End Table",
    ],
    "entertainment": [
        "{adj} TV Stand for {size}\" TVs",
        "{material} Media Console",
        "{style} Entertainment Center",
        "Floating TV Unit",
    ],
}
DEFAULT_TITLE_TEMPLATES = ["{adj} {material} Furniture"]

ADJECTIVES = [
    "Modern", "Contemporary", "Classic", "Elegant", "Luxury",
    "Minimalist", "Rustic", "Industrial", "Scandinavian", "Vintage",
    "Premium", "Executive", "Stylish", "Sleek", "Sophisticated",
]

# Placeholder fillers shared by every category
TITLE_FILLERS = {
    "adj": ADJECTIVES,
    "style": ["Modern", "Classic", "Contemporary"],
    "seater": ["2", "3", "5", "7"],
    "seats": ["4", "6", "8"],
    "size": ["Queen", "King", "Twin", "Full"],
    "doors": ["2", "3", "4", "5"],
    "pieces": ["3", "4", "5", "7"],
    "shelves": ["3", "4", "5", "6"],
    "qty": ["2", "4", "6"],
    "shape": ["Round", "Square", "Rectangular", "Oval"],
}

# Per-category overrides where the same placeholder means something else
CATEGORY_FILLERS = {
    "entertainment": {"size": ["32", "43", "50", "55", "65", "75"]},
}

DESCRIPTION_INTROS = [
    "Elevate your space with this {title}.",
    "Quality {title} for your home or office.",
    "Premium {title} crafted with attention to detail.",
    "Transform your living space with this beautiful {title}.",
]

DESCRIPTION_FEATURES = [
    "Made from high-quality {material} for durability and style.",
    "Features a {condition} finish that complements any décor.",
    "Sturdy construction designed to last for years.",
    "Easy to clean and maintain.",
    "Comfortable and functional design.",
]

DESCRIPTION_DELIVERY = [
    "Available for delivery within {city} and surrounding areas.",
    "Fast delivery available across {city}.",
    "Contact us for delivery options to your location in {city}.",
]

DESCRIPTION_CLOSING = "Meet the producer option available for local pickup."

# axis -> (min, max); equal bounds give a fixed value
DIMENSION_RANGES = {
    "sofa": {"length": (160, 240), "width": (80, 110), "height": (75, 95)},
    "dining-table": {"length": (140, 240), "width": (80, 120), "height": (75, 75)},
    "bed": {"length": (190, 210), "width": (140, 200), "height": (40, 60)},
    "wardrobe": {"length": (120, 250), "width": (50, 70), "height": (180, 220)},
    "desk": {"length": (100, 160), "width": (50, 80), "height": (75, 75)},
    "chair": {"width": (45, 70), "height": (80, 110)},
    "coffee-table": {"length": (80, 140), "width": (50, 90), "height": (40, 55)},
}
DEFAULT_DIMENSION_RANGES = {"length": (80, 200), "width": (40, 100), "height": (40, 180)}

# Round tables are measured across
ROUND_CATEGORIES = {"dining-table", "coffee-table"}
