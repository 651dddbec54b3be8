class Shop:
    def __init__(self, currency="EUR"):
        self.currency = currency

    def index(self):
        return "Shop::index"

    def list_products(self):
        return "Shop::list_products"

    def show_product(self, product_id, slug, lang):
        return [int(product_id), slug, lang]

    def price(self, amount):
        return f"{amount} {self.currency}"
