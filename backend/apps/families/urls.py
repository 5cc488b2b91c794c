"""
Family URL configuration.
"""

from django.urls import path
from . import views

app_name = 'families'

urlpatterns = [
    path('children', views.ChildListView.as_view(), name='child_list'),
    path('children/<uuid:child_id>', views.ChildDetailView.as_view(), name='child_detail'),
    path('connections', views.ConnectionListView.as_view(), name='connection_list'),
    path('connections/<uuid:connection_id>', views.ConnectionDetailView.as_view(), name='connection_detail'),
    path('connect', views.RedeemCodeView.as_view(), name='connect'),
    path('parents', views.MyParentsView.as_view(), name='my_parents'),
]
