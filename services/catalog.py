"""Static product catalog and the in-memory filtering over it.

The catalog lives in code rather than in the database: orders keep a
denormalised snapshot of each line, so nothing references these rows.
"""

CATEGORIES = ("all", "potatoes", "vegetables", "fruits", "berries", "herbs", "eggs", "meat")

SORT_RATING = "rating"
SORT_PRICE_ASC = "price-asc"
SORT_PRICE_DESC = "price-desc"
SORT_NEWEST = "newest"
SORT_OPTIONS = (SORT_RATING, SORT_PRICE_ASC, SORT_PRICE_DESC, SORT_NEWEST)

PRODUCTS = [
    {
        "id": 1, "name": "Early potatoes", "category": "potatoes", "farm": "Farma Kopeček",
        "unit": "kg", "priceRegular": 45, "priceSubscription": 38, "rating": 4.7,
        "isNew": False, "isVegan": True,
    },
    {
        "id": 2, "name": "Purple potatoes", "category": "potatoes", "farm": "Farma Kopeček",
        "unit": "kg", "priceRegular": 79, "priceSubscription": 65, "rating": 4.5,
        "isNew": True, "isVegan": True,
    },
    {
        "id": 3, "name": "Cherry tomatoes", "category": "vegetables", "farm": "BIO zelenina Uhříněves",
        "unit": "500 g", "priceRegular": 89, "priceSubscription": 74, "rating": 4.9,
        "isNew": False, "isVegan": True,
    },
    {
        "id": 4, "name": "Carrots", "category": "vegetables", "farm": "BIO zelenina Uhříněves",
        "unit": "kg", "priceRegular": 39, "priceSubscription": 32, "rating": 4.4,
        "isNew": False, "isVegan": True,
    },
    {
        "id": 5, "name": "Apples Topaz", "category": "fruits", "farm": "BIO zelenina Uhříněves",
        "unit": "kg", "priceRegular": 59, "priceSubscription": 49, "rating": 4.8,
        "isNew": False, "isVegan": True,
    },
    {
        "id": 6, "name": "Strawberries", "category": "berries", "farm": "Farma Kopeček",
        "unit": "500 g", "priceRegular": 129, "priceSubscription": 109, "rating": 5.0,
        "isNew": True, "isVegan": True,
    },
    {
        "id": 7, "name": "Fresh dill", "category": "herbs", "farm": "Farma Kopeček",
        "unit": "bunch", "priceRegular": 29, "priceSubscription": 24, "rating": 4.3,
        "isNew": False, "isVegan": True,
    },
    {
        "id": 8, "name": "Free-range eggs", "category": "eggs", "farm": "HOKI FARMA",
        "unit": "10 pcs", "priceRegular": 95, "priceSubscription": 79, "rating": 4.9,
        "isNew": False, "isVegan": False,
    },
    {
        "id": 9, "name": "Chicken breast", "category": "meat", "farm": "HOKI FARMA",
        "unit": "kg", "priceRegular": 289, "priceSubscription": 249, "rating": 4.6,
        "isNew": True, "isVegan": False,
    },
]


class ProductManager:
    def __init__(self, products=None):
        self.all_products = list(PRODUCTS if products is None else products)

    def get_all(self):
        return self.all_products

    def get_by_id(self, product_id):
        return next((p for p in self.all_products if p["id"] == product_id), None)

    def get_by_category(self, category):
        if category == "all":
            return self.all_products
        return [p for p in self.all_products if p["category"] == category]

    def get_vegan(self):
        return [p for p in self.all_products if p.get("isVegan")]

    def get_new(self):
        return [p for p in self.all_products if p.get("isNew")]

    def by_rating(self):
        return sorted(self.all_products, key=lambda p: p["rating"], reverse=True)

    def by_price_asc(self):
        return sorted(self.all_products, key=lambda p: p["priceSubscription"])

    def by_price_desc(self):
        return sorted(self.all_products, key=lambda p: p["priceSubscription"], reverse=True)

    def search(self, query):
        query = query.lower()
        return [p for p in self.all_products if query in p["name"].lower()]


class FilterManager:
    """Holds the active category and sort option and applies both together."""

    def __init__(self, products=None):
        self.all_products = list(products or [])
        self.active_category = "all"
        self.sort_by = SORT_RATING

    def set_category(self, category):
        self.active_category = category

    def set_sort(self, sort_option):
        self.sort_by = sort_option

    def apply(self):
        filtered = list(self.all_products)

        if self.active_category != "all":
            filtered = [p for p in filtered if p["category"] == self.active_category]

        if self.sort_by == SORT_RATING:
            filtered.sort(key=lambda p: p["rating"], reverse=True)
        elif self.sort_by == SORT_PRICE_ASC:
            filtered.sort(key=lambda p: p["priceSubscription"])
        elif self.sort_by == SORT_PRICE_DESC:
            filtered.sort(key=lambda p: p["priceSubscription"], reverse=True)
        elif self.sort_by == SORT_NEWEST:
            filtered.sort(key=lambda p: p.get("isNew", False), reverse=True)

        return filtered


product_manager = ProductManager()
