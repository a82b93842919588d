from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("companies", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Pair",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("name", models.CharField(max_length=255)),
                ("link", models.CharField(blank=True, max_length=2048, null=True)),
                ("analysis_record", models.TextField(blank=True, null=True)),
                ("buy_shares", models.PositiveIntegerField()),
                ("sell_shares", models.PositiveIntegerField()),
                ("buy_price", models.DecimalField(decimal_places=4, max_digits=20)),
                ("sell_price", models.DecimalField(decimal_places=4, max_digits=20)),
                ("buy_stock_code", models.CharField(blank=True, max_length=20, null=True)),
                ("sell_stock_code", models.CharField(blank=True, max_length=20, null=True)),
                (
                    "current_buy_price",
                    models.DecimalField(blank=True, decimal_places=4, max_digits=20, null=True),
                ),
                (
                    "current_sell_price",
                    models.DecimalField(blank=True, decimal_places=4, max_digits=20, null=True),
                ),
                (
                    "buy_profit_loss",
                    models.DecimalField(blank=True, decimal_places=4, max_digits=24, null=True),
                ),
                (
                    "sell_profit_loss",
                    models.DecimalField(blank=True, decimal_places=4, max_digits=24, null=True),
                ),
                (
                    "profit_loss",
                    models.DecimalField(blank=True, decimal_places=4, max_digits=24, null=True),
                ),
                ("is_settled", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="pairs",
                        to="companies.company",
                    ),
                ),
            ],
            options={
                "db_table": "pairs",
                "ordering": ["id"],
                "indexes": [
                    models.Index(
                        fields=["buy_stock_code", "sell_stock_code"],
                        name="pairs_buy_sto_7c1e2a_idx",
                    ),
                    models.Index(
                        fields=["company", "is_settled"],
                        name="pairs_company_4b8d90_idx",
                    ),
                ],
            },
        ),
    ]
