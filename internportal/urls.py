# internportal/urls.py
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

urlpatterns = [
    path('admin/', admin.site.urls),

    # --- 1. AUTHENTICATION (Djoser + Session Login) ---
    path('auth/', include('djoser.urls')),
    path('auth/', include('djoser.urls.jwt')),
    path('api-auth/', include('rest_framework.urls')),  # Login/Logout for browsable API

    # --- 2. DOCUMENTATION ---
    path('schema/', SpectacularAPIView.as_view(), name='schema'),
    path('swagger/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),

    # --- 3. APPS ---
    path('administration/', include('academics.urls')),
    path('profiles/', include('profiles.urls')),
    path('internships/', include('internships.urls')),
]
