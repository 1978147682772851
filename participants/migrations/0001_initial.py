# Initial schema for Ijtemaa participant registration

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import participants.models


CATEGORY_CHOICES = [('Under 7', 'Under 7'), ('Atfal', 'Atfal'), ('Khuddam', 'Khuddam')]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Region',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Region',
                'verbose_name_plural': 'Regions',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Majlis',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('region', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='majlis', to='participants.region')),
            ],
            options={
                'verbose_name': 'Majlis',
                'verbose_name_plural': 'Majlis',
                'ordering': ['name'],
            },
        ),
        migrations.AddConstraint(
            model_name='majlis',
            constraint=models.UniqueConstraint(fields=('region', 'name'), name='unique_majlis_per_region'),
        ),
        migrations.CreateModel(
            name='RegistrationSequence',
            fields=[
                ('category', models.CharField(choices=CATEGORY_CHOICES, max_length=10, primary_key=True, serialize=False)),
                ('last_value', models.PositiveIntegerField(default=0)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Registration Sequence',
                'verbose_name_plural': 'Registration Sequences',
                'ordering': ['category'],
            },
        ),
        migrations.CreateModel(
            name='Participant',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('registration_number', models.CharField(editable=False, max_length=20, unique=True)),
                ('full_name', models.CharField(max_length=200)),
                ('date_of_birth', models.DateField()),
                ('age', models.PositiveIntegerField()),
                ('category', models.CharField(choices=CATEGORY_CHOICES, db_index=True, max_length=10)),
                ('phone_number', models.CharField(blank=True, default='', max_length=20)),
                ('date_of_arrival', models.DateField()),
                ('luggage_box_number', models.CharField(blank=True, max_length=50, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='registered_participants', to=settings.AUTH_USER_MODEL)),
                ('majlis', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='participants', to='participants.majlis')),
                ('region', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='participants', to='participants.region')),
            ],
            options={
                'verbose_name': 'Participant',
                'verbose_name_plural': 'Participants',
                'ordering': ['-created_at', '-id'],
            },
        ),
        migrations.CreateModel(
            name='EventSettings',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('event_name', models.CharField(default='Annual Majlis Khudam-ul-Ahmadiyya Kenya Ijtemaa', max_length=200)),
                ('khuddam_ordinal', models.PositiveIntegerField(default=51, help_text='Edition number of the Khuddam Ijtemaa')),
                ('atfal_ordinal', models.PositiveIntegerField(default=23, help_text='Edition number of the Atfal Ijtemaa')),
                ('year', models.PositiveIntegerField(default=participants.models._default_event_year)),
                ('venue', models.CharField(default='Nairobi, Kenya', max_length=200)),
                ('theme', models.CharField(blank=True, max_length=300, null=True)),
                ('start_date', models.DateField()),
                ('end_date', models.DateField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Event Settings',
                'verbose_name_plural': 'Event Settings',
                'ordering': ['-id'],
            },
        ),
    ]
