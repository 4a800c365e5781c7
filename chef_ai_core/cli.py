"""
chef_ai_core.cli
================

Punto de entrada mínimo para correr un pedido de receta de punta a punta:

1) Armar `UserPreferences` desde los argumentos.
2) Pedir el markdown de la receta al modelo y extraer sus campos.
3) (Opcional) Pedir la imagen del plato.
4) (Opcional) Traducir la receta.
5) Persistir `recipe.md`, `recipe.png` y `recipe.<idioma>.md` en el
   directorio de salida.

Pensado para demo local y smoke tests manuales; la UI web usa la API.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .catalog import (
    DEFAULT_DIETARY_PREFERENCE,
    DEFAULT_DIFFICULTY_LEVEL,
    DEFAULT_MEAL_TYPE,
    DEFAULT_SPICE_LEVEL,
    LANGUAGES,
    combine_ingredients,
    resolve_language,
)
from .config import get_settings
from .core.abstractions import ModelClient
from .domain_models import UserPreferences
from .engine import RecipePhase, RecipeRequestPipeline
from .llm_client import get_model_client


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chef-ai",
        description="Genera una receta tamil a partir de los ingredientes disponibles.",
    )
    parser.add_argument("ingredients", nargs="+", help="Ingredientes disponibles (ej: Rice Onion Tomato)")
    parser.add_argument("--other", default="", help='Otros ingredientes separados por coma (ej: "potato, beetroot")')
    parser.add_argument("--meal-type", default=DEFAULT_MEAL_TYPE)
    parser.add_argument("--diet", default=DEFAULT_DIETARY_PREFERENCE)
    parser.add_argument("--spice", default=DEFAULT_SPICE_LEVEL)
    parser.add_argument("--difficulty", default=DEFAULT_DIFFICULTY_LEVEL)
    parser.add_argument("--allergies", default="")
    parser.add_argument("--requests", default="", help="Otros pedidos (ej: 'low-fat')")
    parser.add_argument(
        "--translate",
        default=None,
        help="Idioma de traducción: " + ", ".join(lang.code for lang in LANGUAGES),
    )
    parser.add_argument("--no-image", action="store_true", help="No generar la imagen del plato")
    parser.add_argument("--output-dir", default=None, help="Directorio de salida (default: OUTPUT_DIR)")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def _language_name(value: str) -> str:
    for lang in LANGUAGES:
        if value in (lang.code, lang.name):
            return lang.name
    return resolve_language(value).name


def main(argv: Optional[List[str]] = None, client: Optional[ModelClient] = None) -> int:
    """
    Ejecuta un pedido completo y escribe los artefactos en disco.

    Returns
    -------
    int
        0 si se obtuvo la receta, 1 si faltan ingredientes o el pedido de
        texto falló.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    prefs = UserPreferences(
        meal_type=args.meal_type,
        dietary_preference=args.diet,
        ingredients=combine_ingredients(args.ingredients, args.other),
        spice_level=args.spice,
        difficulty_level=args.difficulty,
        allergies=args.allergies,
        other_requests=args.requests,
    )

    pipeline = RecipeRequestPipeline(client=client or get_model_client())
    try:
        state = pipeline.request_text(prefs)
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    if state.phase == RecipePhase.FAILED:
        print(f"❌ {state.error}", file=sys.stderr)
        return 1

    output_dir = Path(args.output_dir or get_settings().output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    fields = state.fields
    if fields is not None:
        print(f"🍛 {fields.title or '(sin título)'}")
        for label, value in (
            ("Tiempo", fields.time),
            ("Calorías", fields.calories),
            ("Dificultad", fields.difficulty),
            ("Tip", fields.healthy_tip),
        ):
            if value:
                print(f"   {label}: {value}")

    md_path = output_dir / "recipe.md"
    md_path.write_text(state.recipe, encoding="utf-8")
    print(f"✅ Receta generada en: {md_path.resolve()}")

    if not args.no_image:
        pipeline.request_image()
        if state.image:
            png_path = output_dir / "recipe.png"
            png_path.write_bytes(state.image)
            print(f"🖼️ Imagen generada en: {png_path.resolve()}")
        else:
            print("⚠️ No se pudo generar la imagen del plato.")

    if args.translate:
        language = _language_name(args.translate)
        translation = pipeline.translate(language)
        if translation is None:
            print(f"⚠️ {state.translation_error}", file=sys.stderr)
        else:
            code = resolve_language(language).code
            tr_path = output_dir / f"recipe.{code}.md"
            tr_path.write_text(translation, encoding="utf-8")
            print(f"🌐 Traducción ({language}) en: {tr_path.resolve()}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
