# Generated migration for verification app

from django.db import migrations, models
import django.db.models.deletion
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('authentication', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='BusinessVerification',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('document_url', models.TextField()),
                ('business_name', models.CharField(blank=True, max_length=200, null=True)),
                ('business_number', models.CharField(blank=True, max_length=20, null=True)),
                ('status', models.CharField(choices=[('pending', '심사중'), ('approved', '승인'), ('rejected', '거절')], default='pending', max_length=20)),
                ('rejection_reason', models.TextField(blank=True, null=True)),
                ('reviewed_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('reviewed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='reviewed_verifications', to='authentication.user')),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='business_verification', to='authentication.user')),
            ],
            options={
                'db_table': 'business_verifications',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['status'], name='idx_verifications_status')],
            },
        ),
    ]
