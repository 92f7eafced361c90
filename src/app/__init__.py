"""App — coração do sistema: casos de uso, infraestrutura e wiring.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- use_cases/: casos de uso (inputs/outputs, sem IO direto)
- domain/: modelos de mensagens outbound e inbound
- infra/: implementações concretas de IO (repositórios WhatsApp)
- protocols/: contratos/interfaces
- observability/: correlation_id para logs estruturados
- constants/: constantes da aplicação

Padrão: app executa; api adapta; config configura.
"""
