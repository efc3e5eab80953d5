# config/asgi.py

import os
from django.core.asgi import get_asgi_application
from channels.routing import ProtocolTypeRouter, URLRouter
from channels.auth import AuthMiddlewareStack
from channels.security.websocket import OriginValidator

# Configurar Django settings
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')

# Importar rotas de WebSocket depois de configurar Django
django_asgi_app = get_asgi_application()

from django.conf import settings  # noqa: E402
from apps.tarefas.routing import websocket_urlpatterns  # noqa: E402

# O frontend roda em outro domínio; os próprios hosts da API também valem
ORIGENS_WEBSOCKET = [settings.FRONTEND_URL, *settings.ALLOWED_HOSTS]

# Configuração ASGI
application = ProtocolTypeRouter({
    # HTTP tradicional
    "http": django_asgi_app,

    # WebSocket com autenticação por sessão
    "websocket": OriginValidator(
        AuthMiddlewareStack(
            URLRouter(websocket_urlpatterns)
        ),
        ORIGENS_WEBSOCKET,
    ),
})
