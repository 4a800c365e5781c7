from chef_ai_core.recipe_parser import extract_recipe_fields, extract_title

from conftest import RECIPE_MD


def test_extract_full_recipe():
    fields = extract_recipe_fields(RECIPE_MD)

    assert fields.title == "Ragi Banana Pancake (மரக்கழி வாழைப்பழ அடை)"
    assert fields.time == "25 minutes"
    assert fields.calories == "180 kcal per serving"
    assert fields.difficulty == "Easy"
    assert fields.healthy_tip == "Jaggery keeps the glycemic load lower than sugar."

    assert fields.body.startswith("A soft, naturally sweet pancake.")
    assert "### Ingredients" in fields.body
    assert "2. Cook on a hot tawa." in fields.body
    assert "Estimated Time" not in fields.body
    assert "Healthy Tip" not in fields.body
    assert "Ragi Banana Pancake" not in fields.body


def test_missing_markers_leave_fields_empty():
    md = "**Lemon Rice**\nA tangy dish.\n### Ingredients\n- Rice"

    fields = extract_recipe_fields(md)

    assert fields.title == "Lemon Rice"
    assert fields.body == "A tangy dish.\n### Ingredients\n- Rice"
    assert fields.time is None
    assert fields.calories is None
    assert fields.difficulty is None
    assert fields.healthy_tip is None


def test_without_bold_title():
    md = "Sorry, these ingredients are not enough for a recipe."

    fields = extract_recipe_fields(md)

    assert fields.title == ""
    assert fields.body == md


def test_never_raises_on_odd_input():
    assert extract_recipe_fields(None).body == ""
    assert extract_recipe_fields(None).title == ""
    assert extract_recipe_fields(123).body == "123"
    assert extract_recipe_fields("").title == ""


def test_heading_title_and_heart_without_variation_selector():
    md = "## **Sambar (சாம்பார்)**\nLentil stew.\n- **\u2764 Healthy Tip:** Add more vegetables."

    fields = extract_recipe_fields(md)

    assert fields.title == "Sambar (சாம்பார்)"
    assert fields.healthy_tip == "Add more vegetables."
    assert fields.body == "Lentil stew."


def test_value_on_next_line():
    md = "**Kesari**\n**\u2764\ufe0f Healthy Tip:**\nUse less sugar.\n### Serving\nHot."

    fields = extract_recipe_fields(md)

    assert fields.healthy_tip == "Use less sugar."
    assert "Use less sugar." not in fields.body
    assert fields.body == "### Serving\nHot."


def test_repeated_marker_first_wins():
    md = "**Upma**\n**🕒 Estimated Time:** 15 minutes\n**🕒 Estimated Time:** 40 minutes\nDone."

    fields = extract_recipe_fields(md)

    assert fields.time == "15 minutes"
    assert fields.body == "Done."


def test_marker_case_and_colon_inside_bold():
    md = "**Idli**\n🔥 estimated calories: 120 kcal\n**💪 Difficulty Level**: Medium"

    fields = extract_recipe_fields(md)

    assert fields.calories == "120 kcal"
    assert fields.difficulty == "Medium"


def test_extract_title():
    assert extract_title(RECIPE_MD) == "Ragi Banana Pancake (மரக்கழி வாழைப்பழ அடை)"
    assert extract_title("no title here") == ""
