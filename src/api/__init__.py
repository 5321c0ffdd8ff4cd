"""API: camada de borda e adapters externos.

Responsabilidades:
- Receber o webhook do Argus (autenticação, parsing do corpo, dicas de telefone)
- Derivar a chave de idempotência do evento
- Falar com a API de chamadas da Vapi

Subpastas:
- connectors/: adapters por integração (argus/, vapi/)
- routes/: endpoints HTTP (webhook, health)

NÃO PODE conter: FSM, regras de negócio, orquestração de use cases.
"""
