import uuid

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


STATUS_CHOICES = [
    ('pending', 'Pendente'),
    ('in_progress', 'Em andamento'),
    ('completed', 'Concluída'),
    ('awaiting_validation', 'Aguardando validação'),
    ('validated', 'Validada'),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('workorder', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='WorkOrderHistory',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('previous_status', models.CharField(blank=True, choices=STATUS_CHOICES, max_length=20, verbose_name='Status anterior')),
                ('new_status', models.CharField(choices=STATUS_CHOICES, max_length=20, verbose_name='Novo status')),
                ('note', models.TextField(blank=True, verbose_name='Observação')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('changed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL, verbose_name='Alterado por')),
                ('work_order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='history', to='workorder.workorder', verbose_name='Ordem de trabalho')),
            ],
            options={
                'verbose_name': 'Histórico da OT',
                'verbose_name_plural': 'Históricos da OT',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['work_order'], name='wo_history_work_order_idx'), models.Index(fields=['created_at'], name='wo_history_created_idx')],
            },
        ),
    ]
