from django.urls import path
from .views import OrdersCollectionView, RetrieveOrderView
app_name = "orders"

urlpatterns = [
    path("order", OrdersCollectionView.as_view(), name="orders-collection"),  # GET list / POST place
    path("order/<str:order_number>", RetrieveOrderView.as_view(), name="orders-detail"),
]
