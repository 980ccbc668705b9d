"""Initial schema: users, circles, plugin catalogue and plugin tables.

Revision ID: circles_initial_20240101
Revises:
Create Date: 2024-01-01 00:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'circles_initial_20240101'
down_revision = None
branch_labels = None
depends_on = None

PLUGINS = ['To-do', 'Shopping List', 'Poll', 'Event', 'Expenses', 'Tracking System']
BILL_CATEGORIES = ['Home', 'Food', 'Transport', 'Health', 'Education', 'Leisure', 'Other']


def _removal_columns():
    return [
        sa.Column('removed_on', sa.DateTime(timezone=True), nullable=True),
        sa.Column('removed_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
    ]


def upgrade() -> None:
    user_type = sa.Enum('local', 'google', name='user_type')

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('ext_id', sa.String(length=32), nullable=False, unique=True),
        sa.Column('email', sa.String(length=254), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(), nullable=True),
        sa.Column('first_name', sa.String(length=128), nullable=True),
        sa.Column('last_name', sa.String(length=128), nullable=True),
        sa.Column('photo_url', sa.String(), nullable=True),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('type', user_type, nullable=False, server_default='local'),
        sa.Column('federated_subject', sa.String(), nullable=True),
        sa.Column('is_blocked', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('email_validation_hash', sa.String(length=128), nullable=True, unique=True),
        sa.Column('email_validation_expires_on', sa.DateTime(timezone=True), nullable=True),
        sa.Column('email_validated_on', sa.DateTime(timezone=True), nullable=True),
        sa.Column('forgot_password_hash', sa.String(length=128), nullable=True, unique=True),
        sa.Column('forgot_password_expires_on', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_on', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_on', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_users_email', 'users', ['email'])

    op.create_table(
        'circles',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=56), nullable=False),
        sa.Column('image_path', sa.String(), nullable=True),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_on', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('inactivated_on', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_circles_created_by', 'circles', ['created_by'])

    op.create_table(
        'circle_members',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('circle_id', sa.Integer(), sa.ForeignKey('circles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('joined_on', sa.DateTime(timezone=True), nullable=True),
        sa.Column('left_on', sa.DateTime(timezone=True), nullable=True),
        sa.Column('admin_since', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_on', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_circle_members_circle_id', 'circle_members', ['circle_id'])
    op.create_index('ix_circle_members_user_id', 'circle_members', ['user_id'])
    op.create_index('ix_circle_members_email', 'circle_members', ['email'])

    plugins = op.create_table(
        'plugins',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=56), nullable=False, unique=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('created_on', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('inactivated_on', sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        'circle_plugins',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('circle_id', sa.Integer(), sa.ForeignKey('circles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('plugin_id', sa.Integer(), sa.ForeignKey('plugins.id'), nullable=False),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_on', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('inactivated_on', sa.DateTime(timezone=True), nullable=True),
        sa.Column('inactivated_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.UniqueConstraint('circle_id', 'plugin_id', name='uq_circle_plugins_circle_plugin'),
    )

    op.create_table(
        'plugin_todos',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('circle_id', sa.Integer(), sa.ForeignKey('circles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('description', sa.String(length=254), nullable=False),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_on', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('done_on', sa.DateTime(timezone=True), nullable=True),
        sa.Column('removed_on', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_plugin_todos_circle_creator', 'plugin_todos', ['circle_id', 'created_by'])

    op.create_table(
        'plugin_shopping_items',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('circle_id', sa.Integer(), sa.ForeignKey('circles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('description', sa.String(length=254), nullable=False),
        sa.Column('photo_id', sa.String(length=36), nullable=True, unique=True),
        sa.Column('photo_path', sa.String(), nullable=True),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_on', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('purchased_on', sa.DateTime(timezone=True), nullable=True),
        sa.Column('purchased_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('purchased_price', sa.Numeric(10, 2), nullable=True),
        *_removal_columns(),
    )
    op.create_index('ix_plugin_shopping_items_circle_id', 'plugin_shopping_items', ['circle_id'])

    op.create_table(
        'plugin_polls',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('circle_id', sa.Integer(), sa.ForeignKey('circles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('question', sa.String(length=1024), nullable=False),
        sa.Column('period_start_on', sa.DateTime(timezone=True), nullable=False),
        sa.Column('period_end_on', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_on', sa.DateTime(timezone=True), server_default=sa.func.now()),
        *_removal_columns(),
    )
    op.create_index('ix_plugin_polls_circle_id', 'plugin_polls', ['circle_id'])

    op.create_table(
        'plugin_poll_answers',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('poll_id', sa.Integer(), sa.ForeignKey('plugin_polls.id', ondelete='CASCADE'), nullable=False),
        sa.Column('answer', sa.String(length=1024), nullable=False),
        sa.Column('total_votes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_on', sa.DateTime(timezone=True), server_default=sa.func.now()),
        *_removal_columns(),
    )
    op.create_index('ix_plugin_poll_answers_poll_id', 'plugin_poll_answers', ['poll_id'])

    op.create_table(
        'plugin_poll_votes',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('answer_id', sa.Integer(), sa.ForeignKey('plugin_poll_answers.id', ondelete='CASCADE'),
                  nullable=False),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_on', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_plugin_poll_votes_answer_id', 'plugin_poll_votes', ['answer_id'])

    op.create_table(
        'plugin_events',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('circle_id', sa.Integer(), sa.ForeignKey('circles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=254), nullable=False),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('start_on', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_on', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_on', sa.DateTime(timezone=True), server_default=sa.func.now()),
        *_removal_columns(),
    )
    op.create_index('ix_plugin_events_circle_id', 'plugin_events', ['circle_id'])

    op.create_table(
        'plugin_event_members',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('event_id', sa.Integer(), sa.ForeignKey('plugin_events.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_on', sa.DateTime(timezone=True), server_default=sa.func.now()),
        *_removal_columns(),
    )
    op.create_index('ix_plugin_event_members_event_id', 'plugin_event_members', ['event_id'])

    op.create_table(
        'plugin_event_photos',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('event_id', sa.Integer(), sa.ForeignKey('plugin_events.id', ondelete='CASCADE'), nullable=False),
        sa.Column('photo_id', sa.String(length=36), nullable=False, unique=True),
        sa.Column('photo_path', sa.String(), nullable=False),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_on', sa.DateTime(timezone=True), server_default=sa.func.now()),
        *_removal_columns(),
    )
    op.create_index('ix_plugin_event_photos_event_id', 'plugin_event_photos', ['event_id'])

    categories = op.create_table(
        'plugin_bill_categories',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=56), nullable=False, unique=True),
    )

    op.create_table(
        'plugin_bills',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('circle_id', sa.Integer(), sa.ForeignKey('circles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('bill_name', sa.String(length=56), nullable=False),
        sa.Column('bill_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('bill_category_id', sa.Integer(), sa.ForeignKey('plugin_bill_categories.id'), nullable=False),
        sa.Column('bill_date', sa.Date(), nullable=False),
        sa.Column('created_on', sa.DateTime(timezone=True), server_default=sa.func.now()),
        *_removal_columns(),
    )
    op.create_index('ix_plugin_bills_circle_id', 'plugin_bills', ['circle_id'])

    op.create_table(
        'plugin_budgets',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('circle_id', sa.Integer(), sa.ForeignKey('circles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('budget_name', sa.String(length=56), nullable=False),
        sa.Column('budget_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('created_on', sa.DateTime(timezone=True), server_default=sa.func.now()),
        *_removal_columns(),
    )
    op.create_index('ix_plugin_budgets_circle_id', 'plugin_budgets', ['circle_id'])

    op.create_table(
        'plugin_tracking_positions',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, unique=True),
        sa.Column('latitude', sa.Numeric(11, 8), nullable=False),
        sa.Column('longitude', sa.Numeric(11, 8), nullable=False),
        sa.Column('last_updated_on', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.bulk_insert(plugins, [{'name': name, 'price': 0} for name in PLUGINS])
    op.bulk_insert(categories, [{'name': name} for name in BILL_CATEGORIES])


def downgrade() -> None:
    for table in (
        'plugin_tracking_positions',
        'plugin_budgets',
        'plugin_bills',
        'plugin_bill_categories',
        'plugin_event_photos',
        'plugin_event_members',
        'plugin_events',
        'plugin_poll_votes',
        'plugin_poll_answers',
        'plugin_polls',
        'plugin_shopping_items',
        'plugin_todos',
        'circle_plugins',
        'plugins',
        'circle_members',
        'circles',
        'users',
    ):
        op.drop_table(table)
    sa.Enum(name='user_type').drop(op.get_bind(), checkfirst=True)
