# Generated migration for academies app

from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('academies', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='academyclass',
            name='curriculum',
            field=models.JSONField(blank=True, default=list),
        ),
    ]
