from django.contrib import admin
from django.urls import path, include


urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # API
    path('api/', include('api.urls')),
    path('api-auth/', include('rest_framework.urls')),
]
