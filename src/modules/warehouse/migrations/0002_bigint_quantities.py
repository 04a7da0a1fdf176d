from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("warehouse", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="product",
            name="in_stock_quantity",
            field=models.BigIntegerField(default=0),
        ),
        migrations.AlterField(
            model_name="product",
            name="reserved_quantity",
            field=models.BigIntegerField(default=0),
        ),
    ]
