"""Pacote do proxy de webhooks do jogo -> Discord.

Este pacote contém:
- constants: variáveis de ambiente e tiers de geração
- utils: helpers de parsing, presença de campos e IP do cliente
- auth: estratégias de autenticação (assinatura HMAC / token)
- validation: schemas, janela anti-replay e validação de payload
- gatekeeper: autenticação + validação por requisição
- throttle: bloqueio de IPs por tentativas falhas
- detection: extração da geração e resolução de tier
- enrichment: links do Roblox e do joiner
- formatters: montagem dos embeds
- services: envio ao Discord
- controller: criação do Flask app e endpoints
"""
