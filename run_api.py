#!/usr/bin/env python3
"""
Script helper para levantar la API del asistente de cocina.
Ejecutar desde la raíz del proyecto: python run_api.py [--port 8000] [--no-reload]
"""

import argparse
import sys


def main() -> int:
    parser = argparse.ArgumentParser(description="Levanta la API de chef-ai-core con uvicorn")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--no-reload", action="store_true", help="Desactiva el auto-reload")
    args = parser.parse_args()

    try:
        import uvicorn
    except ImportError as e:
        print("❌ Error: No se pudo importar uvicorn. ¿Instalaste el proyecto?")
        print("   Ejecuta: pip install -e .")
        print(f"   Error: {e}")
        return 1

    print(f"🚀 Iniciando API en http://localhost:{args.port}")
    print(f"📖 Documentación disponible en http://localhost:{args.port}/docs")
    uvicorn.run("api.main:app", host=args.host, port=args.port, reload=not args.no_reload)
    return 0


if __name__ == "__main__":
    sys.exit(main())
