from django.db import migrations


ROLES = [
	("doctor", "Doctor"),
	("nurse", "Nurse"),
]


def create_roles(apps, schema_editor):
	Role = apps.get_model("core", "Role")
	for name, label in ROLES:
		Role.objects.using(schema_editor.connection.alias).get_or_create(
			name=name,
			defaults={"label": label},
		)


def delete_roles(apps, schema_editor):
	Role = apps.get_model("core", "Role")
	Role.objects.using(schema_editor.connection.alias).filter(
		name__in=[name for name, _ in ROLES],
		users__isnull=True,
	).delete()


class Migration(migrations.Migration):

	dependencies = [
		("core", "0001_initial"),
	]

	operations = [
		migrations.RunPython(create_roles, delete_roles),
	]
