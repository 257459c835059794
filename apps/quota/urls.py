from django.urls import path
from . import views

app_name = 'quota'

urlpatterns = [
    path('current/',  views.current,  name='current'),
    path('unbooked/', views.unbooked, name='unbooked'),
]
