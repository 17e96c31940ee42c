from django.urls import path
from .views import supplier_list_create, supplier_detail, expedition_list_create, expedition_detail

urlpatterns = [
    # Supplier endpoints
    path('suppliers/', supplier_list_create, name='supplier-list-create'),
    path('suppliers/<int:pk>/', supplier_detail, name='supplier-detail'),

    # Expedition endpoints
    path('expeditions/', expedition_list_create, name='expedition-list-create'),
    path('expeditions/<int:pk>/', expedition_detail, name='expedition-detail'),
]
