import django.db.models.deletion
import uuid6
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="UserProfile",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "role",
                    models.CharField(
                        choices=[
                            ("ADMIN_SISTEMA", "Administrador do Sistema"),
                            ("GERENTE_COMERCIAL", "Gerente Comercial"),
                            ("FINANCEIRO", "Financeiro"),
                            ("OPERADOR_PEDIDOS", "Operador de Pedidos"),
                            ("AUDITOR_READONLY", "Auditor (somente leitura)"),
                            ("CLIENTE_ADMIN", "Administrador do Cliente"),
                            ("CLIENTE_USUARIO", "Usuário do Cliente"),
                        ],
                        max_length=30,
                    ),
                ),
                ("customer_id", models.UUIDField(blank=True, null=True)),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="profile",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "user_profiles",
            },
        ),
    ]
