"""add user roles, admin permissions and RLS policies

Revision ID: 002_add_roles_and_rls
Revises: 001_initial
Create Date: 2026-10-19 10:30:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy import text
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '002_add_roles_and_rls'
down_revision = '001_initial'
branch_labels = None
depends_on = None

ADMIN_TABLES = ['stores', 'vendors', 'products', 'receipts', 'receipt_products']


def upgrade():
    """
    Cria user_roles / admin_permissions, a função has_role e as policies RLS.

    As policies assumem Supabase Auth (auth.uid()). A API acessa o banco
    com a role de serviço, que ignora RLS; as policies protegem o acesso
    direto pelo cliente Supabase.
    """
    op.create_table(
        'user_roles',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('role', sa.String(20), nullable=False, server_default='user'),
        sa.Column('created_by', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('user_id', 'role', name='uq_user_roles_user_role'),
        sa.CheckConstraint("role IN ('admin', 'user')", name='ck_user_roles_role'),
    )
    op.create_index('ix_user_roles_id', 'user_roles', ['id'])
    op.create_index('ix_user_roles_user_id', 'user_roles', ['user_id'])

    op.create_table(
        'admin_permissions',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False, unique=True),
        sa.Column('can_validate_receipts', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_admin_permissions_id', 'admin_permissions', ['id'])
    op.create_index('ix_admin_permissions_user_id', 'admin_permissions', ['user_id'])

    op.execute(text("""
        CREATE OR REPLACE FUNCTION public.has_role(_user_id uuid, _role text)
        RETURNS boolean
        LANGUAGE sql
        STABLE
        SECURITY DEFINER
        SET search_path = public
        AS $$
            SELECT EXISTS (
                SELECT 1 FROM public.user_roles
                WHERE user_id = _user_id AND role = _role
            )
        $$;
    """))

    for table in ADMIN_TABLES + ['user_roles', 'admin_permissions']:
        op.execute(text(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY;"))

    # Tabelas do programa: somente admins
    for table in ADMIN_TABLES:
        op.execute(text(f"""
            CREATE POLICY "admins_all_{table}" ON {table}
            FOR ALL
            USING (public.has_role(auth.uid(), 'admin'))
            WITH CHECK (public.has_role(auth.uid(), 'admin'));
        """))

    # Usuário vê os próprios papéis; admins gerenciam todos
    op.execute(text("""
        CREATE POLICY "users_select_own_roles" ON user_roles
        FOR SELECT
        USING (user_id = auth.uid());
    """))
    op.execute(text("""
        CREATE POLICY "admins_manage_roles" ON user_roles
        FOR ALL
        USING (public.has_role(auth.uid(), 'admin'))
        WITH CHECK (public.has_role(auth.uid(), 'admin'));
    """))
    op.execute(text("""
        CREATE POLICY "admins_manage_permissions" ON admin_permissions
        FOR ALL
        USING (public.has_role(auth.uid(), 'admin'))
        WITH CHECK (public.has_role(auth.uid(), 'admin'));
    """))


def downgrade():
    op.execute(text('DROP POLICY IF EXISTS "admins_manage_permissions" ON admin_permissions;'))
    op.execute(text('DROP POLICY IF EXISTS "admins_manage_roles" ON user_roles;'))
    op.execute(text('DROP POLICY IF EXISTS "users_select_own_roles" ON user_roles;'))
    for table in ADMIN_TABLES:
        op.execute(text(f'DROP POLICY IF EXISTS "admins_all_{table}" ON {table};'))
        op.execute(text(f"ALTER TABLE {table} DISABLE ROW LEVEL SECURITY;"))

    op.execute(text("DROP FUNCTION IF EXISTS public.has_role(uuid, text);"))
    op.drop_table('admin_permissions')
    op.drop_table('user_roles')
