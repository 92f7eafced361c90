"""Rotas HTTP da API — adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (webhook WhatsApp, health)
- Validação inicial de request (headers, query params)
- Delegação para connectors e repositórios do app
- Respostas HTTP apropriadas

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
