"""API — camada de borda.

Responsabilidades:
- Receber requests da Meta (webhooks)
- Validar assinaturas e payloads
- Chamar a Graph API via HTTP

Subpastas:
- connectors/: adapters HTTP e webhook do WhatsApp
- routes/: endpoints HTTP (webhook, health)

NÃO PODE conter: regras de negócio nem orquestração de use cases.
"""
