from django.urls import path
from . import views

app_name = 'policies'

urlpatterns = [
    path('',             views.policy_collection, name='collection'),
    path('<str:key>/',   views.policy_detail,     name='detail'),
]
