"""API: camada de borda HTTP.

Responsabilidades:
- Endpoints HTTP (envio de email, profiler, health)
- Middlewares por requisição (profiler, flush de spool)
- Conversão de objetos internos para respostas JSON

Subpastas:
- middleware/: profiler e flush de spool
- routes/: endpoints HTTP

NÃO PODE conter: regras de envio, lógica de coleta.
"""
