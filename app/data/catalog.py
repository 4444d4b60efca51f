# Starter catalog loaded into an empty product table on local startup.
DEFAULT_PRODUCTS = [
    {
        "id": "k001",
        "name": "Axo Keychain",
        "slug": "axo-keychain",
        "category": "keychains",
        "price_usd": 5,
        "description": "Cute articulated axolotl keychain.",
        "is_new": True,
    },
    {
        "id": "t001",
        "name": "Caliper Card",
        "slug": "caliper-card",
        "category": "tools",
        "price_usd": 3,
        "description": "Carry a caliper inside your wallet.",
    },
]
