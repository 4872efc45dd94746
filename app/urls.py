"""
URL configuration for the fleet maintenance project.

- /api/v1/             API REST (DRF)
- /api/dashboard/      indicadores agregados
- /swagger/, /redoc/   documentação OpenAPI
"""
from django.contrib import admin
from django.urls import path, include, re_path
from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

from .dashboard_views import dashboard_overview

schema_view = get_schema_view(
    openapi.Info(
        title="Fleet Maintenance API",
        default_version='v1',
        description="""
        API REST para gestão de manutenção de frota

        ## Recursos Disponíveis
        - Usuários, clientes, sucursais e veículos
        - Funcionários, fornecedores e estoque de peças
        - Manutenção programada
        - Reportes de falha, diagnósticos e ordens de trabalho
        - Histórico de mudanças de status e notificações

        ## Fluxo
        reporte (pending) -> atribuição (diagnostico) -> diagnóstico aprovado
        (in_progress) -> OT validada (resolved)

        ## Autenticação
        A API usa autenticação de sessão do Django e autenticação básica HTTP.
        """,
    ),
    public=True,
    permission_classes=[permissions.AllowAny],
)

urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # API REST
    path('api/', include('api.urls')),
    path('api/dashboard/overview/', dashboard_overview, name='dashboard-overview'),

    # Swagger/OpenAPI documentation
    re_path(r'^swagger(?P<format>\.json|\.yaml)$', schema_view.without_ui(cache_timeout=0), name='schema-json'),
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
]
