# cookmate/core/ingredients.py
from __future__ import annotations

import re
from typing import Set

# Matched whole-word, case-insensitive. Grouped by aisle for maintenance only.
INGREDIENT_VOCABULARY = (
    # Proteins
    "chicken", "beef", "pork", "lamb", "turkey", "duck", "goose", "venison", "bison",
    "fish", "salmon", "tuna", "cod", "haddock", "halibut", "mackerel", "sardines", "anchovies",
    "shrimp", "prawns", "lobster", "crab", "scallops", "mussels", "clams", "oysters", "squid",
    "tofu", "tempeh", "seitan", "eggs", "egg whites", "egg yolks",
    # Grains and starches
    "rice", "brown rice", "white rice", "jasmine rice", "basmati rice", "wild rice", "arborio rice",
    "pasta", "spaghetti", "fettuccine", "penne", "macaroni", "lasagna", "noodles", "ramen",
    "udon", "soba", "bread", "whole wheat bread", "sourdough", "baguette", "ciabatta",
    "flour", "all-purpose flour", "whole wheat flour", "bread flour", "cake flour", "oats",
    "quinoa", "couscous", "bulgur", "barley", "farro", "millet", "polenta", "cornmeal",
    # Vegetables
    "potato", "sweet potato", "yams", "onion", "red onion", "green onion", "shallots",
    "garlic", "ginger", "leek", "celery", "carrot", "carrots", "parsnip", "turnip", "rutabaga",
    "tomato", "cherry tomato", "grape tomato", "roma tomato", "heirloom tomato",
    "bell pepper", "red bell pepper", "green bell pepper", "yellow bell pepper", "jalapeno",
    "habanero", "serrano", "cayenne", "chili pepper", "lettuce", "romaine", "iceberg",
    "spinach", "kale", "arugula", "swiss chard", "collard greens", "cabbage", "napa cabbage",
    "bok choy", "broccoli", "cauliflower", "brussels sprouts", "asparagus", "artichoke",
    "zucchini", "yellow squash", "butternut squash", "acorn squash", "pumpkin", "cucumber",
    "eggplant", "mushroom", "mushrooms", "portobello", "shiitake", "cremini", "oyster mushroom",
    "chanterelle", "green beans", "snap peas", "snow peas", "sugar snap peas", "peas", "corn",
    "edamame",
    # Fruits
    "apple", "banana", "orange", "lemon", "lime", "grapefruit", "tangerine", "clementine",
    "pear", "peach", "nectarine", "plum", "apricot", "cherry", "strawberry", "blueberry",
    "raspberry", "blackberry", "boysenberry", "cranberry", "grape", "pineapple", "mango",
    "papaya", "guava", "kiwi", "pomegranate", "fig", "date", "avocado", "coconut", "plantain",
    # Dairy and alternatives
    "milk", "whole milk", "skim milk", "2% milk", "cream", "heavy cream", "whipping cream",
    "half-and-half", "butter", "unsalted butter", "salted butter", "ghee", "cheese", "cheddar",
    "mozzarella", "parmesan", "feta", "goat cheese", "blue cheese", "gouda", "swiss cheese",
    "provolone", "ricotta", "cottage cheese", "cream cheese", "yogurt", "greek yogurt",
    "sour cream", "buttermilk", "condensed milk", "evaporated milk", "coconut milk",
    # Oils and fats
    "oil", "olive oil", "extra virgin olive oil", "vegetable oil", "canola oil", "sunflower oil",
    "sesame oil", "peanut oil", "avocado oil", "coconut oil", "grapeseed oil", "lard", "shortening",
    # Herbs and spices
    "salt", "sea salt", "kosher salt", "pepper", "black pepper", "white pepper", "cayenne pepper",
    "paprika", "smoked paprika", "chili powder", "cumin", "coriander", "turmeric", "curry powder",
    "garlic powder", "onion powder", "ginger powder", "cinnamon", "nutmeg", "cloves", "allspice",
    "cardamom", "vanilla", "vanilla extract", "almond extract", "peppermint extract", "oregano",
    "thyme", "rosemary", "sage", "basil", "parsley", "cilantro", "dill", "mint", "tarragon",
    "bay leaf", "marjoram", "saffron", "star anise", "fennel seeds", "mustard seeds",
    # Sweeteners
    "sugar", "white sugar", "brown sugar", "powdered sugar", "confectioners sugar", "raw sugar",
    "honey", "maple syrup", "agave nectar", "corn syrup", "molasses", "stevia",
    "artificial sweetener",
    # Baking
    "baking powder", "baking soda", "yeast", "active dry yeast", "instant yeast", "cornstarch",
    "starch", "cocoa powder", "unsweetened cocoa", "chocolate", "dark chocolate",
    "milk chocolate", "white chocolate", "chocolate chips", "butterscotch chips",
    "peanut butter chips",
    # Nuts and seeds
    "almonds", "cashews", "peanuts", "walnuts", "pecans", "hazelnuts", "pistachios",
    "macadamia nuts", "pine nuts", "sunflower seeds", "pumpkin seeds", "chia seeds",
    "flax seeds", "sesame seeds",
    # Canned and preserved
    "tomato sauce", "tomato paste", "tomato puree", "diced tomatoes", "crushed tomatoes",
    "broth", "chicken broth", "beef broth", "vegetable broth", "stock", "chicken stock",
    "beef stock", "vegetable stock", "olives", "pickles", "capers", "artichoke hearts",
    "roasted red peppers", "salsa", "pesto",
    # Condiments and sauces
    "soy sauce", "teriyaki sauce", "hoisin sauce", "oyster sauce", "fish sauce",
    "worcestershire sauce", "hot sauce", "sriracha", "tabasco", "bbq sauce", "ketchup",
    "mustard", "dijon mustard", "mayonnaise", "salad dressing", "ranch dressing",
    "italian dressing", "balsamic vinegar", "apple cider vinegar", "white vinegar",
    "red wine vinegar", "rice vinegar",
    # International
    "miso paste", "nori", "seaweed", "wasabi", "sake", "mirin", "rice wine vinegar",
    "gochujang", "kimchi", "curry paste", "coconut cream", "paneer", "tahini",
    "hummus", "falafel", "pita bread", "naan", "tortillas", "corn tortillas", "flour tortillas",
    # Beverages
    "coffee", "tea", "green tea", "black tea", "herbal tea", "juice", "orange juice",
    "apple juice", "cranberry juice", "lemon juice", "lime juice", "wine", "red wine",
    "white wine", "beer", "champagne", "soda", "sparkling water", "club soda", "tonic water",
)

# Checked by plain containment so they are found even inside longer phrases.
MULTI_WORD_INGREDIENTS = (
    "bell pepper", "green onion", "red onion", "yellow onion", "white onion",
    "garlic powder", "onion powder", "chili powder", "baking powder", "baking soda",
    "olive oil", "vegetable oil", "canola oil", "coconut oil", "extra virgin olive oil",
    "whole wheat flour", "all-purpose flour", "brown sugar", "powdered sugar",
    "chocolate chips", "peanut butter", "cream cheese", "greek yogurt",
    "chicken broth", "beef broth", "vegetable broth", "chicken stock",
    "beef stock", "vegetable stock", "apple cider vinegar", "rice wine vinegar",
    "red wine vinegar", "white wine vinegar", "balsamic vinegar", "soy sauce",
    "hot sauce", "salad dressing", "tomato sauce", "tomato paste", "tomato puree",
    "diced tomatoes", "crushed tomatoes", "evaporated milk", "condensed milk",
    "heavy cream", "whipping cream", "half-and-half", "sour cream", "buttermilk",
)


def _compile_vocabulary(terms) -> re.Pattern:
    # Longest first so "olive oil" wins over "oil" at the same position.
    unique = sorted(set(terms), key=len, reverse=True)
    body = "|".join(re.escape(t) for t in unique)
    return re.compile(rf"(?<![\w])(?:{body})(?![\w])", re.IGNORECASE)


_VOCABULARY_RE = _compile_vocabulary(INGREDIENT_VOCABULARY)


def extract_ingredients(text: str) -> Set[str]:
    """Return the lower-cased food terms mentioned in ``text``.

    Whole-word vocabulary matches are unioned with multi-word phrases found by
    substring containment. Never raises; an empty set means nothing was found.
    """
    if not text:
        return set()
    found = {m.group(0).lower() for m in _VOCABULARY_RE.finditer(text)}
    lowered = text.lower()
    found.update(phrase for phrase in MULTI_WORD_INGREDIENTS if phrase in lowered)
    return found
