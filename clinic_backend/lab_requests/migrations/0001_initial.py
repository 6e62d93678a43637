import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

	initial = True

	dependencies = [
		("appointments", "0001_initial"),
		migrations.swappable_dependency(settings.AUTH_USER_MODEL),
	]

	operations = [
		migrations.CreateModel(
			name="LabRequest",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("test_type", models.CharField(max_length=255)),
				("reason", models.TextField(blank=True, null=True)),
				(
					"status",
					models.CharField(
						choices=[("pending", "pending"), ("completed", "completed")],
						db_index=True,
						default="pending",
						max_length=16,
					),
				),
				("result", models.TextField(blank=True, null=True)),
				("created_at", models.DateTimeField(auto_now_add=True)),
				("updated_at", models.DateTimeField(auto_now=True)),
				("completed_at", models.DateTimeField(blank=True, db_index=True, null=True)),
				(
					"appointment",
					models.ForeignKey(
						on_delete=django.db.models.deletion.CASCADE,
						related_name="lab_requests",
						to="appointments.appointment",
					),
				),
				(
					"nurse",
					models.ForeignKey(
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="requested_lab_requests",
						to=settings.AUTH_USER_MODEL,
					),
				),
				(
					"doctor",
					models.ForeignKey(
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="assigned_lab_requests",
						to=settings.AUTH_USER_MODEL,
					),
				),
			],
			options={
				"verbose_name": "Lab Request",
				"verbose_name_plural": "Lab Requests",
				"ordering": ["-created_at", "-id"],
			},
		),
	]
