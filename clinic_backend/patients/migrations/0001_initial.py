import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

	initial = True

	dependencies = [
		migrations.swappable_dependency(settings.AUTH_USER_MODEL),
	]

	operations = [
		migrations.CreateModel(
			name="Patient",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("full_name", models.CharField(max_length=255)),
				("age", models.PositiveIntegerField()),
				(
					"gender",
					models.CharField(
						choices=[("male", "male"), ("female", "female"), ("other", "other")],
						max_length=16,
					),
				),
				("address", models.TextField(blank=True, null=True)),
				("contact", models.CharField(blank=True, max_length=64, null=True)),
				("created_at", models.DateTimeField(auto_now_add=True)),
				("updated_at", models.DateTimeField(auto_now=True)),
				(
					"registered_by",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="registered_patients",
						to=settings.AUTH_USER_MODEL,
					),
				),
			],
			options={
				"verbose_name": "Patient",
				"verbose_name_plural": "Patients",
				"ordering": ["-created_at", "-id"],
			},
		),
	]
