# Generated migration for consultations app

from django.db import migrations, models
import django.db.models.deletion
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('authentication', '0001_initial'),
        ('academies', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Consultation',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('student_name', models.CharField(max_length=100)),
                ('student_grade', models.CharField(blank=True, max_length=50, null=True)),
                ('message', models.TextField(blank=True, null=True)),
                ('status', models.CharField(choices=[('pending', '대기중'), ('completed', '완료')], default='pending', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('academy', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='consultations', to='academies.academy')),
                ('parent', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='consultations', to='authentication.user')),
            ],
            options={
                'db_table': 'consultations',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='ConsultationReservation',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('student_name', models.CharField(max_length=100)),
                ('student_grade', models.CharField(blank=True, max_length=50, null=True)),
                ('reservation_date', models.DateField()),
                ('reservation_time', models.CharField(max_length=5)),
                ('message', models.TextField(blank=True, null=True)),
                ('status', models.CharField(choices=[('pending', '대기중'), ('confirmed', '확정'), ('cancelled', '취소'), ('completed', '완료')], default='pending', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('academy', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='reservations', to='academies.academy')),
                ('parent', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='consultation_reservations', to='authentication.user')),
            ],
            options={
                'db_table': 'consultation_reservations',
                'ordering': ['-reservation_date', '-reservation_time'],
            },
        ),
    ]
