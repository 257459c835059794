from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [
    path('login/',                           views.login_view,    name='login'),
    path('logout/',                          views.logout_view,   name='logout'),
    path('me/',                              views.me,            name='me'),
    path('profile/',                         views.profile_setup, name='profile'),
    path('lifters/',                         views.lifters,       name='lifters'),
    path('lifters/<uuid:profile_id>/status/', views.lifter_status, name='lifter_status'),
]
