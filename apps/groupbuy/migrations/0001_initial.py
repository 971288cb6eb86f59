# Generated manually for the groupbuy app

import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Campaign',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=200)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('active', 'Active'), ('goal_met_pending_payment', 'Goal met, awaiting payment'), ('goal_met_finalized', 'Goal met, finalized'), ('failed_expired', 'Failed (expired)'), ('failed_cancelled', 'Failed (cancelled)')], default='pending', max_length=30)),
                ('goal_quantity', models.PositiveIntegerField(validators=[MinValueValidator(1)])),
                ('current_quantity', models.PositiveIntegerField(default=0)),
                ('discount_price', models.DecimalField(decimal_places=2, max_digits=12, validators=[MinValueValidator(Decimal('0.01'))])),
                ('payment_window_hours', models.PositiveIntegerField(default=24)),
                ('expiry_at', models.DateTimeField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'groupbuy_campaigns',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status', 'expiry_at'], name='groupbuy_ca_status_2d0c7b_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Commitment',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('status', models.CharField(choices=[('committed_unpaid', 'Committed, unpaid'), ('paid', 'Paid'), ('payment_window_expired', 'Payment window expired'), ('refunded', 'Refunded')], default='committed_unpaid', max_length=30)),
                ('quantity', models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])),
                ('committed_price', models.DecimalField(decimal_places=2, max_digits=12, validators=[MinValueValidator(Decimal('0.01'))])),
                ('payment_deadline', models.DateTimeField(blank=True, null=True)),
                ('payment_ref', models.CharField(blank=True, max_length=100)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('campaign', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='commitments', to='groupbuy.campaign')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='commitments', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'groupbuy_commitments',
                'ordering': ['created_at'],
                'indexes': [
                    models.Index(fields=['status', 'payment_deadline'], name='groupbuy_co_status_9b41e3_idx'),
                    models.Index(fields=['campaign', 'status'], name='groupbuy_co_campaig_6f2a8d_idx'),
                    models.Index(fields=['user', 'status'], name='groupbuy_co_user_id_1c5e47_idx'),
                ],
            },
        ),
    ]
