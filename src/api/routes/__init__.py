"""Rotas HTTP da API: adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (webhook Argus, health)
- Desacoplar o request do framework antes de chamar o use case
- Respostas HTTP apropriadas

Estrutura:
- routes/argus/: webhook do discador Argus
- routes/health/: health checks e readiness

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
