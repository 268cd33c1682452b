import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="OrderModel",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("order_number", models.CharField(editable=False, max_length=36, unique=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "orders",
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="OrderLineItemModel",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("position", models.PositiveIntegerField()),
                ("sku_code", models.CharField(max_length=255)),
                ("price", models.DecimalField(decimal_places=2, max_digits=19)),
                ("quantity", models.IntegerField()),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="line_items",
                        to="orders.ordermodel",
                    ),
                ),
            ],
            options={
                "db_table": "order_line_items",
                "ordering": ["position"],
            },
        ),
        migrations.AddConstraint(
            model_name="orderlineitemmodel",
            constraint=models.UniqueConstraint(fields=("order", "position"), name="ux_order_line_item_position"),
        ),
    ]
