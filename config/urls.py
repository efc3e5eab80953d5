# config/urls.py

from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # API
    path('', include('apps.core.urls')),
    path('api/tarefas/', include('apps.tarefas.urls')),
]

# Customizar títulos do admin
admin.site.site_header = 'UpTask Admin'
admin.site.site_title = 'UpTask'
admin.site.index_title = 'Administração do Sistema'
