# Hand-authored outfit bundles sold alongside the product table.
# Prices are in dollars; image URLs may still point at the legacy bucket host.
LEGACY = "https://pub-46371bda6faf4910b74631159fc2dfd4.r2.dev/kct-prodcuts"

BUNDLES = [
    {
        "id": "bundle-navy-classic-wedding",
        "name": "Navy Classic Wedding Bundle",
        "description": "Navy two-piece suit with a crisp white shirt and burgundy silk tie.",
        "category": "wedding-bundles",
        "bundle_price": 229.99,
        "original_price": 289.97,
        "image_url": f"{LEGACY}/suits/navy/navy-main-2.jpg",
        "suit": {"color": "Navy", "type": "2-Piece"},
        "shirt": {"color": "White", "fit": "Slim"},
        "tie": {"color": "Burgundy", "style": "Classic"},
        "occasions": ["wedding", "formal"],
        "trending": True,
        "season": "year-round",
        "ai_score": 94,
    },
    {
        "id": "bundle-dusty-sage-spring",
        "name": "Dusty Sage Spring Wedding Bundle",
        "description": "Light grey suit paired with a dusty sage vest and tie for spring ceremonies.",
        "category": "wedding-bundles",
        "bundle_price": 249.99,
        "original_price": 319.97,
        "image_url": f"{LEGACY}/Spring%20Wedding%20Bundles/dusty-sage-vest-tie.png",
        "suit": {"color": "Light Grey", "type": "2-Piece"},
        "shirt": {"color": "White", "fit": "Classic"},
        "tie": {"color": "Sage", "style": "Skinny"},
        "occasions": ["wedding"],
        "trending": True,
        "season": "spring",
        "ai_score": 91,
    },
    {
        "id": "bundle-brown-fall-wedding",
        "name": "Brown Fall Wedding Bundle",
        "description": "Brown suit, white shirt and brown tie in warm autumn tones.",
        "category": "wedding-bundles",
        "bundle_price": 229.99,
        "original_price": 279.97,
        "image_url": f"{LEGACY}/Fall%20Wedding%20Bundles/brown-suit-white-shirt-brown-tie.png",
        "suit": {"color": "Brown", "type": "2-Piece"},
        "shirt": {"color": "White", "fit": "Classic"},
        "tie": {"color": "Brown", "style": "Classic"},
        "occasions": ["wedding", "cocktail"],
        "trending": False,
        "season": "fall",
        "ai_score": 87,
    },
    {
        "id": "bundle-black-tuxedo-gala",
        "name": "Black Tuxedo Gala Bundle",
        "description": "Black tuxedo with a white tuxedo shirt and black bow tie.",
        "category": "tuxedo-bundles",
        "bundle_price": 299.99,
        "original_price": 379.97,
        "image_url": f"{LEGACY}/Tuxedo-Bundles/black-tuxedo-white-tix-shirt-black-blowtie.png",
        "suit": {"color": "Black", "type": "Tuxedo"},
        "shirt": {"color": "White", "fit": "Slim"},
        "tie": {"color": "Black", "style": "Bow Tie"},
        "occasions": ["black-tie", "gala", "prom"],
        "trending": True,
        "season": "winter",
        "ai_score": 96,
    },
    {
        "id": "bundle-indigo-dusty-pink",
        "name": "Indigo Summer Wedding Bundle",
        "description": "Indigo suit with a white shirt and dusty pink tie for outdoor summer weddings.",
        "category": "wedding-bundles",
        "bundle_price": 199.99,
        "original_price": 259.97,
        "image_url": f"{LEGACY}/Spring%20Wedding%20Bundles/indigo-2p-white-dusty-pink.png",
        "suit": {"color": "Indigo", "type": "2-Piece"},
        "shirt": {"color": "White", "fit": "Slim"},
        "tie": {"color": "Dusty Pink", "style": "Skinny"},
        "occasions": ["wedding"],
        "trending": False,
        "season": "summer",
        "ai_score": 85,
    },
    {
        "id": "bundle-navy-casual",
        "name": "Navy Casual Bundle",
        "description": "Navy suit, white shirt and a white pocket square. No tie required.",
        "category": "casual-bundles",
        "bundle_price": 179.99,
        "original_price": 229.97,
        "image_url": f"{LEGACY}/casual-bundles/navy-white-shirt-white-pocket-sqaure.png",
        "suit": {"color": "Navy", "type": "2-Piece"},
        "shirt": {"color": "White", "fit": "Slim"},
        "pocket_square": {"color": "White", "pattern": "Solid"},
        "occasions": ["casual", "business"],
        "trending": False,
        "season": "year-round",
        "ai_score": 82,
    },
    {
        "id": "bundle-charcoal-executive",
        "name": "Charcoal Executive Bundle",
        "description": "Charcoal grey suit with a light blue shirt and navy tie for the boardroom.",
        "category": "business-bundles",
        "bundle_price": 249.99,
        "original_price": 309.97,
        "image_url": f"{LEGACY}/suits/char%20grey/dark-grey-two-main.jpg",
        "suit": {"color": "Charcoal", "type": "2-Piece"},
        "shirt": {"color": "Light Blue", "fit": "Classic"},
        "tie": {"color": "Navy", "style": "Classic"},
        "occasions": ["business", "formal"],
        "trending": False,
        "season": "year-round",
        "ai_score": 89,
    },
    {
        "id": "bundle-tan-summer",
        "name": "Tan Summer Cocktail Bundle",
        "description": "Tan suit with a white shirt and coral tie.",
        "category": "wedding-bundles",
        "bundle_price": 219.99,
        "original_price": 269.97,
        "image_url": f"{LEGACY}/suits/tan/tan-main.jpg",
        "suit": {"color": "Tan", "type": "2-Piece"},
        "shirt": {"color": "White", "fit": "Slim"},
        "tie": {"color": "Coral", "style": "Skinny"},
        "occasions": ["cocktail", "wedding"],
        "trending": True,
        "season": "summer",
        "ai_score": 84,
    },
]
