"""
API HTTP para chef-ai-core.

Esta capa expone endpoints REST que usan los orquestadores del core
(chef_ai_core.engine, chef_ai_core.chat, chef_ai_core.image_editor) para
pedir recetas, conversar con el asistente y editar imágenes.

La API está diseñada para ser consumida por:
- UI web
- Clientes externos
- Scripts de automatización
"""
