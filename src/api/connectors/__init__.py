"""Connectors de borda para sistemas externos.

Estrutura:
- argus/: webhook inbound do discador Argus
- vapi/: API de chamadas de voz da Vapi

Cada sistema tem seu próprio connector, garantindo SRP e isolamento de falhas.
"""

__all__: list[str] = []
