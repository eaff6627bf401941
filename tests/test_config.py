import pytest

from src.auth.schemas import UserRole
from src.auth.service import UserService
from src.config import Settings


class TestAdminSeedSettings:
    def test_defaults(self, monkeypatch):
        for name in ('ADMIN_EMAIL', 'ADMIN_PASSWORD', 'ADMIN_PHONE', 'ADMIN_NIC'):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.ADMIN_EMAIL == 'admin@lankatickets.lk'
        assert settings.ADMIN_PASSWORD is None
        assert settings.ADMIN_NIC == '000000000V'

    def test_read_from_environment(self, monkeypatch):
        monkeypatch.setenv('ADMIN_EMAIL', 'ops@example.lk')
        monkeypatch.setenv('ADMIN_PASSWORD', 'Adm1nPass!')
        monkeypatch.setenv('ADMIN_PHONE', '+94 71 000 1111')
        monkeypatch.setenv('ADMIN_NIC', '851234567V')

        settings = Settings(_env_file=None)

        assert settings.ADMIN_EMAIL == 'ops@example.lk'
        assert settings.ADMIN_PASSWORD == 'Adm1nPass!'
        assert settings.ADMIN_PHONE == '+94 71 000 1111'
        assert settings.ADMIN_NIC == '851234567V'

    def test_read_from_env_file(self, monkeypatch, tmp_path):
        monkeypatch.delenv('ADMIN_PASSWORD', raising=False)
        env_file = tmp_path / '.env'
        env_file.write_text('ADMIN_PASSWORD=FromDotEnv1\n')

        settings = Settings(_env_file=env_file)

        assert settings.ADMIN_PASSWORD == 'FromDotEnv1'


class TestSeedAdmin:
    def test_creates_admin_from_settings(self, monkeypatch, engine, session_factory, db):
        import seed_admin_data

        monkeypatch.setattr(seed_admin_data, 'engine', engine)
        monkeypatch.setattr(seed_admin_data, 'SessionLocal', session_factory)
        monkeypatch.setattr(seed_admin_data, 'setup_logging', lambda: None)
        monkeypatch.setattr(seed_admin_data.settings, 'ADMIN_EMAIL', 'ops@example.lk')
        monkeypatch.setattr(seed_admin_data.settings, 'ADMIN_PASSWORD', 'Adm1nPass!')
        monkeypatch.setattr(seed_admin_data.settings, 'ADMIN_NIC', '851234567V')

        seed_admin_data.create_initial_admin_user()

        admin = UserService.get_user_by_email(db, 'ops@example.lk')
        assert admin is not None
        assert admin.role == UserRole.ADMIN
        assert admin.nic == '851234567V'

    def test_requires_password(self, monkeypatch, engine, session_factory):
        import seed_admin_data

        monkeypatch.setattr(seed_admin_data, 'engine', engine)
        monkeypatch.setattr(seed_admin_data, 'SessionLocal', session_factory)
        monkeypatch.setattr(seed_admin_data, 'setup_logging', lambda: None)
        monkeypatch.setattr(seed_admin_data.settings, 'ADMIN_PASSWORD', None)

        with pytest.raises(SystemExit, match='ADMIN_PASSWORD must be set'):
            seed_admin_data.create_initial_admin_user()
