"""
Domain enums for MacroLog application.
Contains all enumeration types used across the domain models.
"""

import enum


class MealCategory(str, enum.Enum):
    """Meal categories offered by the logging UI"""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"


class MacroField(str, enum.Enum):
    """The five nutrition fields produced by a macro estimate, in wire order"""

    CALORIES = "calories"
    PROTEIN = "protein"
    FAT = "fat"
    FIBRE = "fibre"
    SUGAR = "sugar"
