# chef_ai_core/prompts.py

"""
Prompts e instrucciones para la generación de recetas, imágenes,
traducciones y el asistente de chat.

Los marcadores (🕒, 🔥, 💪, ❤️) que pide el prompt de receta son los mismos
que reconoce `recipe_parser`: si se cambia uno, hay que cambiar el otro.
"""

from __future__ import annotations

from .domain_models import UserPreferences
from .recipe_parser import (
    CALORIES_MARKER,
    DIFFICULTY_MARKER,
    HEALTHY_TIP_MARKER,
    TIME_MARKER,
)

RECIPE_PROMPT_TEMPLATE = """
You are a friendly and expert chef specializing in healthy, authentic Tamil Nadu cuisine.
A user wants a recipe based on ingredients they already have.

**CRITICAL INSTRUCTION:** You MUST generate a recipe primarily using the ingredients provided by the user. If essential pantry staples like salt, oil, or basic spices (like turmeric or mustard seeds) are needed and not listed, you may include them. However, the main components of the dish MUST come from the user's list. If the ingredients are insufficient for a recipe, politely state that and suggest what else might be needed.

User Preferences:
- Meal Type: {meal_type}
- Dietary Preference: {dietary_preference}
- Ingredients on hand: {ingredients}
- Desired Spice Level: {spice_level}
- Desired Difficulty Level: {difficulty_level}
- Allergies to avoid: {allergies}
- Other requests: {other_requests}

Please provide a detailed recipe with the following structure, formatted in Markdown:
- **Recipe Title**: **An authentic and appealing Tamil name with an English translation in parentheses.** For example: "**Ragi Banana Pancake (மரக்கழி வாழைப்பழ அடை)**". The title must be on the first line and in bold.
- **Short Description**: A one or two-sentence description of the dish.
- **{time_marker}**: The approximate total time for preparation and cooking.
- **{calories_marker}**: A rough estimate of the calories per serving.
- **{difficulty_marker}**: The estimated difficulty (Easy, Medium, or Hard).
- **Ingredients**: A bulleted list of all ingredients with precise measurements (e.g., 1 cup, 2 tsp).
- **Instructions**: A numbered list of clear, step-by-step instructions.
- **{healthy_tip_marker}**: A specific, helpful tip related to the recipe and the user's preferences.

Write each of the {time_marker}, {calories_marker}, {difficulty_marker} and {healthy_tip_marker} entries on its own line, as "**<label>:** <value>".
Ensure the recipe is authentic to Tamil Nadu's culinary style. Do not include any unsafe or non-edible ingredients.
"""

IMAGE_PROMPT_TEMPLATE = (
    'A vibrant, appetizing photograph of "{title}", a traditional and healthy dish '
    "from Tamil Nadu, presented beautifully in authentic kitchenware."
)

TRANSLATION_PROMPT_TEMPLATE = """
You are an expert translator. Please translate the following recipe into the language: {language}.
Preserve the original Markdown formatting (headings, bold text, lists, etc.) exactly as it is.
Do not add any extra text or explanations, just provide the direct translation.

Recipe to translate:
---
{text}
"""

CHAT_SYSTEM_INSTRUCTION = (
    "You are Cheffy, a warm and knowledgeable AI cooking assistant with a love for "
    "healthy, authentic Tamil Nadu cuisine. Answer cooking questions, suggest "
    "substitutions and explain techniques clearly and concisely. Use Markdown when "
    "lists or steps help the answer."
)

CHAT_GREETING = "Hello! I am Cheffy, your personal AI cooking assistant. How can I help you today?"

NONE_SPECIFIED = "None specified"


def build_recipe_prompt(prefs: UserPreferences) -> str:
    """
    Construye el prompt de receta a partir de las preferencias del formulario.
    """
    return RECIPE_PROMPT_TEMPLATE.format(
        meal_type=prefs.meal_type,
        dietary_preference=prefs.dietary_preference,
        ingredients=prefs.ingredients,
        spice_level=prefs.spice_level,
        difficulty_level=prefs.difficulty_level,
        allergies=prefs.allergies.strip() or NONE_SPECIFIED,
        other_requests=prefs.other_requests.strip() or NONE_SPECIFIED,
        time_marker=TIME_MARKER,
        calories_marker=CALORIES_MARKER,
        difficulty_marker=DIFFICULTY_MARKER,
        healthy_tip_marker=HEALTHY_TIP_MARKER,
    )


def build_image_prompt(title: str) -> str:
    return IMAGE_PROMPT_TEMPLATE.format(title=title)


def build_translation_prompt(text: str, language: str) -> str:
    return TRANSLATION_PROMPT_TEMPLATE.format(language=language, text=text)


def fallback_dish_title(ingredients: str) -> str:
    """Título sintético para la imagen cuando la receta no trae uno en negrita."""
    return f"A dish with {ingredients}"
