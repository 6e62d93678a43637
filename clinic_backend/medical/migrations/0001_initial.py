import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

	initial = True

	dependencies = [
		("patients", "0001_initial"),
		("appointments", "0001_initial"),
		migrations.swappable_dependency(settings.AUTH_USER_MODEL),
	]

	operations = [
		migrations.CreateModel(
			name="MedicalDescription",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("description", models.TextField()),
				("notes", models.TextField(blank=True, null=True)),
				("prescriptions", models.JSONField(blank=True, null=True)),
				("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
				(
					"patient",
					models.ForeignKey(
						on_delete=django.db.models.deletion.CASCADE,
						related_name="medical_descriptions",
						to="patients.patient",
					),
				),
				(
					"appointment",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.CASCADE,
						related_name="medical_descriptions",
						to="appointments.appointment",
					),
				),
				(
					"doctor",
					models.ForeignKey(
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="medical_descriptions",
						to=settings.AUTH_USER_MODEL,
					),
				),
			],
			options={
				"verbose_name": "Medical Description",
				"verbose_name_plural": "Medical Descriptions",
				"ordering": ["-created_at", "-id"],
			},
		),
	]
