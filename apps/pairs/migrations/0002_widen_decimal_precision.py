from django.db import migrations, models


def price_field(null=False):
    return models.DecimalField(blank=null, null=null, decimal_places=8, max_digits=28)


def profit_loss_field():
    return models.DecimalField(blank=True, null=True, decimal_places=8, max_digits=40)


class Migration(migrations.Migration):

    dependencies = [
        ("pairs", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(model_name="pair", name="buy_price", field=price_field()),
        migrations.AlterField(model_name="pair", name="sell_price", field=price_field()),
        migrations.AlterField(model_name="pair", name="current_buy_price", field=price_field(null=True)),
        migrations.AlterField(model_name="pair", name="current_sell_price", field=price_field(null=True)),
        migrations.AlterField(model_name="pair", name="buy_profit_loss", field=profit_loss_field()),
        migrations.AlterField(model_name="pair", name="sell_profit_loss", field=profit_loss_field()),
        migrations.AlterField(model_name="pair", name="profit_loss", field=profit_loss_field()),
    ]
