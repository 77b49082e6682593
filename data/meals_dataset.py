"""Demo meal catalog seeded into an empty database.

Ingredient lines are (name, category, amount, unit); amount may be None for
"to taste" lines.
"""

MEALS_DATA = [
    {
        "name": "Mediterranean Quinoa Bowl",
        "description": "Quinoa with cucumber, tomato, olives and feta.",
        "prep_time": 15, "cook_time": 20, "servings": 4,
        "cuisine_type": "mediterranean", "difficulty_level": "easy",
        "dietary_tags": ["vegetarian", "gluten-free", "mediterranean"],
        "ingredients": [
            ("Quinoa", "Grains", 1.5, "cups"),
            ("Cucumber", "Produce", 1, "whole"),
            ("Cherry Tomatoes", "Produce", 2, "cups"),
            ("Kalamata Olives", "Pantry", 0.5, "cup"),
            ("Feta Cheese", "Dairy", 4, "oz"),
            ("Olive Oil", "Pantry", 3, "tbsp"),
        ],
    },
    {
        "name": "Keto Garlic Butter Salmon",
        "description": "Pan-seared salmon with garlic butter and asparagus.",
        "prep_time": 10, "cook_time": 15, "servings": 2,
        "cuisine_type": "american", "difficulty_level": "medium",
        "dietary_tags": ["keto", "low-carb", "gluten-free", "high-protein"],
        "ingredients": [
            ("Salmon Fillet", "Seafood", 2, "fillets"),
            ("Butter", "Dairy", 3, "tbsp"),
            ("Garlic", "Produce", 4, "cloves"),
            ("Asparagus", "Produce", 1, "bunch"),
        ],
    },
    {
        "name": "Vegan Chickpea Curry",
        "description": "Chickpeas simmered in coconut milk and spices.",
        "prep_time": 10, "cook_time": 30, "servings": 6,
        "cuisine_type": "indian", "difficulty_level": "easy",
        "dietary_tags": ["vegan", "vegetarian", "dairy-free"],
        "ingredients": [
            ("Chickpeas", "Pantry", 2, "cans"),
            ("Coconut Milk", "Pantry", 1, "can"),
            ("Onion", "Produce", 1, "whole"),
            ("Garlic", "Produce", 3, "cloves"),
            ("Curry Powder", "Spices", 2, "tbsp"),
            ("Basmati Rice", "Grains", 2, "cups"),
        ],
    },
    {
        "name": "Chicken Stir Fry",
        "description": "Chicken and vegetables in a soy-ginger sauce.",
        "prep_time": 15, "cook_time": 15, "servings": 4,
        "cuisine_type": "asian", "difficulty_level": "easy",
        "dietary_tags": ["high-protein", "dairy-free"],
        "ingredients": [
            ("Chicken Breast", "Meat", 1.5, "lbs"),
            ("Bell Pepper", "Produce", 2, "whole"),
            ("Broccoli", "Produce", 2, "cups"),
            ("Soy Sauce", "Pantry", 0.25, "cup"),
            ("Ginger", "Produce", 1, "tbsp"),
        ],
    },
    {
        "name": "Classic Margherita Pizza",
        "description": "Homemade dough with tomato, mozzarella and basil.",
        "prep_time": 90, "cook_time": 12, "servings": 4,
        "cuisine_type": "italian", "difficulty_level": "medium",
        "dietary_tags": ["vegetarian"],
        "ingredients": [
            ("Flour", "Baking", 3, "cups"),
            ("Yeast", "Baking", 1, "packet"),
            ("Tomato Sauce", "Pantry", 1, "cup"),
            ("Mozzarella", "Dairy", 8, "oz"),
            ("Fresh Basil", "Produce", None, None),
        ],
    },
    {
        "name": "Paleo Beef Lettuce Wraps",
        "description": "Seasoned ground beef served in butter lettuce cups.",
        "prep_time": 10, "cook_time": 15, "servings": 4,
        "cuisine_type": "asian", "difficulty_level": "easy",
        "dietary_tags": ["paleo", "low-carb", "gluten-free", "dairy-free"],
        "ingredients": [
            ("Ground Beef", "Meat", 1, "lb"),
            ("Butter Lettuce", "Produce", 1, "head"),
            ("Carrot", "Produce", 2, "whole"),
            ("Garlic", "Produce", 2, "cloves"),
        ],
    },
    {
        "name": "Black Bean Tacos",
        "description": "Spiced black beans with avocado and salsa.",
        "prep_time": 10, "cook_time": 10, "servings": 4,
        "cuisine_type": "mexican", "difficulty_level": "easy",
        "dietary_tags": ["vegan", "vegetarian"],
        "ingredients": [
            ("Black Beans", "Pantry", 2, "cans"),
            ("Corn Tortillas", "Bakery", 8, "pieces"),
            ("Avocado", "Produce", 2, "whole"),
            ("Salsa", None, 1, "cup"),
        ],
    },
    {
        "name": "Greek Lemon Chicken",
        "description": "Roasted chicken thighs with lemon, oregano and potatoes.",
        "prep_time": 15, "cook_time": 45, "servings": 6,
        "cuisine_type": "greek", "difficulty_level": "medium",
        "dietary_tags": ["gluten-free", "mediterranean", "high-protein"],
        "ingredients": [
            ("Chicken Thighs", "Meat", 2, "lbs"),
            ("Lemon", "Produce", 2, "whole"),
            ("Potatoes", "Produce", 1.5, "lbs"),
            ("Olive Oil", "Pantry", 0.25, "cup"),
            ("Oregano", "Spices", 1, "tbsp"),
        ],
    },
    {
        "name": "Mushroom Risotto",
        "description": "Creamy arborio rice with mushrooms and parmesan.",
        "prep_time": 10, "cook_time": 35, "servings": 4,
        "cuisine_type": "italian", "difficulty_level": "hard",
        "dietary_tags": ["vegetarian", "gluten-free"],
        "ingredients": [
            ("Arborio Rice", "Grains", 1.5, "cups"),
            ("Mushrooms", "Produce", 8, "oz"),
            ("Vegetable Broth", "Pantry", 4, "cups"),
            ("Parmesan", "Dairy", 0.5, "cup"),
        ],
    },
]
