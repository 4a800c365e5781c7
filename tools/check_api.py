#!/usr/bin/env python3
"""
Script de verificación para diagnosticar problemas de instalación.

Revisa dependencias, imports del core y de la API, la configuración del
cliente de OpenAI y las rutas registradas. No hace llamadas al modelo.

Ejecutar: python tools/check_api.py
"""

import importlib
import sys
from pathlib import Path

# Agregar raíz del proyecto al path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

DEPENDENCIES = ["fastapi", "pydantic", "uvicorn", "openai", "numpy", "dotenv", "multipart"]

CORE_MODULES = [
    "chef_ai_core.config",
    "chef_ai_core.catalog",
    "chef_ai_core.recipe_parser",
    "chef_ai_core.engine",
    "chef_ai_core.speech",
    "chef_ai_core.audio",
    "chef_ai_core.chat",
    "chef_ai_core.image_editor",
]

API_MODULES = ["api.models.requests", "api.dependencies", "api.routes"]


def _check_imports(title: str, names) -> bool:
    print(f"\n{title}")
    ok = True
    for name in names:
        try:
            module = importlib.import_module(name)
        except ImportError as e:
            print(f"   ❌ {name}: {e}")
            ok = False
            continue
        version = getattr(module, "__version__", "")
        print(f"   ✅ {name} {version}".rstrip())
    return ok


def main() -> int:
    print("🔍 Verificando dependencias y estructura de chef-ai-core...")

    if not _check_imports("1. Dependencias:", DEPENDENCIES):
        return 1
    if not _check_imports("2. Core:", CORE_MODULES):
        return 1
    if not _check_imports("3. API:", API_MODULES):
        return 1

    print("\n4. Configuración:")
    from chef_ai_core.config import get_settings

    settings = get_settings()
    if settings.openai_api_key:
        print("   ✅ OPENAI_API_KEY configurada")
    else:
        print("   ⚠️ OPENAI_API_KEY vacía: los endpoints que llaman al modelo van a fallar")
    print(f"   ✅ Texto: {settings.openai_model_text} | Imagen: {settings.openai_model_image} | TTS: {settings.openai_model_tts}")

    print("\n5. App FastAPI:")
    from api.main import app

    print(f"   ✅ {app.title} v{app.version}")
    for route in app.routes:
        methods = ",".join(sorted(getattr(route, "methods", None) or []))
        if methods:
            print(f"   • {methods:<10} {route.path}")

    print("\n✅ Todas las verificaciones pasaron.")
    print("\nPara levantar el servidor:")
    print("   python run_api.py")
    return 0


if __name__ == "__main__":
    sys.exit(main())
