from django.urls import include, path

urlpatterns = [
    path('', include('daraja.urls')),
]
