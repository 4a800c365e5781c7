"""
Interfaces genéricas del core.

Define los contratos (Protocols) de los colaboradores externos:
- Cliente del modelo generativo (texto, imagen, traducción, chat, voz)
- Motor de síntesis de voz del navegador
- Salida de audio para buffers PCM decodificados
"""
