# One UNINITIALIZED counter per category, so issuance never has to create rows.

from django.db import migrations


CATEGORIES = ['Under 7', 'Atfal', 'Khuddam']


def create_sequences(apps, schema_editor):
    RegistrationSequence = apps.get_model('participants', 'RegistrationSequence')
    for category in CATEGORIES:
        RegistrationSequence.objects.get_or_create(category=category, defaults={'last_value': 0})


class Migration(migrations.Migration):

    dependencies = [
        ('participants', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(create_sequences, migrations.RunPython.noop),
    ]
