import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

	initial = True

	dependencies = [
		("patients", "0001_initial"),
		migrations.swappable_dependency(settings.AUTH_USER_MODEL),
	]

	operations = [
		migrations.CreateModel(
			name="Appointment",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				(
					"status",
					models.CharField(
						choices=[("pending", "pending"), ("diagnosed", "diagnosed")],
						default="pending",
						max_length=16,
					),
				),
				("is_referred", models.BooleanField(default=False)),
				("is_lab_requested", models.BooleanField(default=False)),
				("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
				("updated_at", models.DateTimeField(auto_now=True)),
				(
					"patient",
					models.ForeignKey(
						on_delete=django.db.models.deletion.CASCADE,
						related_name="appointments",
						to="patients.patient",
					),
				),
				(
					"doctor",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="assigned_appointments",
						to=settings.AUTH_USER_MODEL,
					),
				),
				(
					"created_by",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="created_appointments",
						to=settings.AUTH_USER_MODEL,
					),
				),
			],
			options={
				"verbose_name": "Appointment",
				"verbose_name_plural": "Appointments",
				"ordering": ["-created_at", "-id"],
			},
		),
	]
