# Generated migration for seminars app

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
            name='Seminar',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True, null=True)),
                ('date', models.DateTimeField()),
                ('location', models.CharField(blank=True, max_length=500, null=True)),
                ('capacity', models.IntegerField(blank=True, null=True)),
                ('status', models.CharField(choices=[('recruiting', '모집중'), ('closed', '마감')], default='recruiting', max_length=20)),
                ('subject', models.CharField(blank=True, max_length=100, null=True)),
                ('target_grade', models.CharField(blank=True, max_length=100, null=True)),
                ('image_url', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('academy', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='seminars', to='academies.academy')),
            ],
            options={
                'db_table': 'seminars',
                'ordering': ['date'],
            },
        ),
        migrations.CreateModel(
            name='SeminarApplication',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('student_name', models.CharField(max_length=100)),
                ('student_grade', models.CharField(blank=True, max_length=50, null=True)),
                ('attendee_count', models.PositiveIntegerField(default=1)),
                ('message', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('seminar', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='applications', to='seminars.seminar')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='seminar_applications', to='authentication.user')),
            ],
            options={
                'db_table': 'seminar_applications',
                'ordering': ['-created_at'],
                'unique_together': {('seminar', 'user')},
            },
        ),
    ]
