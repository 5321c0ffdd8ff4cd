"""App: orquestração, casos de uso e infraestrutura do relay.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- use_cases/: casos de uso (inputs/outputs, IO só via protocolos)
- services/: serviços de aplicação (localização de telefone)
- domain/: modelos puros (telefone, payload, registro de evento)
- infra/: implementações concretas de IO (HTTP, log de eventos)
- protocols/: contratos/interfaces
- observability/: correlation id e métricas como logs

Padrão: app executa; api adapta; fsm governa; utils apoia.
"""
