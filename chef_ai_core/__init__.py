"""
chef_ai_core
============

Core del asistente de cocina tamil: pedido de recetas (texto, imagen y
traducción), extracción de campos del markdown, lectura en voz alta, chat
con streaming y editor de imágenes, todo sobre el mismo cliente del modelo.

La capa HTTP vive en el paquete `api` y nunca habla directo con
`llm_client`; usa los orquestadores de este paquete.
"""
