import uuid

import django.core.validators
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('reports', '0001_initial'),
        ('employees', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Diagnostic',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('diagnosis', models.TextField(verbose_name='Diagnóstico / causa provável')),
                ('recommendations', models.TextField(blank=True, verbose_name='Recomendação técnica')),
                ('estimated_cost', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(0)], verbose_name='Custo estimado')),
                ('odometer', models.PositiveIntegerField(blank=True, null=True, verbose_name='Odômetro')),
                ('vehicle_condition', models.CharField(blank=True, max_length=100, verbose_name='Condição do veículo')),
                ('fuel_level', models.CharField(blank=True, max_length=30, verbose_name='Nível de combustível')),
                ('severity', models.CharField(choices=[('low', 'Baixa'), ('medium', 'Média'), ('high', 'Alta'), ('critical', 'Crítica')], default='medium', max_length=10, verbose_name='Severidade')),
                ('estimated_repair_time', models.CharField(blank=True, max_length=60, verbose_name='Tempo estimado de reparo')),
                ('required_materials', models.TextField(blank=True, verbose_name='Materiais necessários')),
                ('requires_additional_tests', models.BooleanField(default=False, verbose_name='Requer testes adicionais')),
                ('approved_at', models.DateTimeField(blank=True, null=True, verbose_name='Aprovado em')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
                ('approved_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='approved_diagnostics', to=settings.AUTH_USER_MODEL, verbose_name='Aprovado por')),
                ('employee', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='diagnostics', to='employees.employee', verbose_name='Funcionário')),
                ('report', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='diagnostics', to='reports.report', verbose_name='Reporte')),
            ],
            options={
                'verbose_name': 'Diagnóstico',
                'verbose_name_plural': 'Diagnósticos',
                'ordering': ['-created_at'],
                'constraints': [models.UniqueConstraint(condition=models.Q(('approved_at__isnull', True)), fields=('report',), name='unique_open_diagnostic_per_report')],
            },
        ),
    ]
