from django.db import models


class OrderModel(models.Model):
    # Public identifier generated by the domain (uuid4 string)
    order_number = models.CharField(max_length=36, unique=True, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "orders"
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return self.order_number


class OrderLineItemModel(models.Model):
    order = models.ForeignKey(OrderModel, related_name="line_items", on_delete=models.CASCADE)
    # Position within the order, keeps the requested item order stable
    position = models.PositiveIntegerField()
    sku_code = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=19, decimal_places=2)
    quantity = models.IntegerField()

    class Meta:
        db_table = "order_line_items"
        ordering = ["position"]
        constraints = [
            models.UniqueConstraint(fields=["order", "position"], name="ux_order_line_item_position"),
        ]
