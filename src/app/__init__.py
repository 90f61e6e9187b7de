"""App, coração do sistema (subsistema de email, observabilidade e wiring).

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: modelos de domínio (snapshot de atividade de email)
- infra/: implementações concretas (mailers, transportes, loggers)
- protocols/: contratos/interfaces
- observability/: logs estruturados, métricas, profiler e coletores

Padrão: app executa; api adapta; config configura.
"""
