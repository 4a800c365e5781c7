from chef_ai_core.cli import build_parser, main

from conftest import FAKE_PNG


def test_parser_defaults():
    args = build_parser().parse_args(["Rice", "Onion"])

    assert args.ingredients == ["Rice", "Onion"]
    assert args.translate is None
    assert not args.no_image


def test_cli_writes_recipe_image_and_translation(client, tmp_path, capsys):
    code = main(
        ["Rice", "Onion", "--other", "Tomato", "--meal-type", "Lunch", "--translate", "ta", "--output-dir", str(tmp_path)],
        client=client,
    )

    assert code == 0
    assert (tmp_path / "recipe.md").read_text(encoding="utf-8") == client.recipe
    assert (tmp_path / "recipe.png").read_bytes() == FAKE_PNG
    assert (tmp_path / "recipe.ta.md").exists()
    assert "Rice, Onion, Tomato" in client.text_prompts[0]
    assert client.translations[0]["language"] == "தமிழ் (Tamil)"

    out = capsys.readouterr().out
    assert "Ragi Banana Pancake" in out
    assert "25 minutes" in out


def test_cli_no_image(client, tmp_path):
    code = main(["Rice", "--no-image", "--output-dir", str(tmp_path)], client=client)

    assert code == 0
    assert client.image_prompts == []
    assert not (tmp_path / "recipe.png").exists()


def test_cli_text_failure(client, tmp_path, capsys):
    client.fail_text = True

    code = main(["Rice", "--output-dir", str(tmp_path)], client=client)

    assert code == 1
    assert not (tmp_path / "recipe.md").exists()
    assert "Sorry, I couldn't find a recipe" in capsys.readouterr().err


def test_cli_empty_ingredients(client, tmp_path, capsys):
    code = main(["", "--output-dir", str(tmp_path)], client=client)

    assert code == 1
    assert client.text_prompts == []
    assert capsys.readouterr().err.startswith("❌ ")
