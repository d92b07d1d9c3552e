"""Both user store implementations must behave identically."""
import pytest

from uiforge.services.service_base import DuplicateEmailError, DuplicateUsernameError
from uiforge.services.user_store import InMemoryUserStore, SQLAlchemyUserStore, create_user_store


@pytest.fixture(params=['memory', 'database'])
def store(request):
    if request.param == 'memory':
        return InMemoryUserStore(bcrypt_rounds=4)
    request.getfixturevalue('app_context')
    return SQLAlchemyUserStore(bcrypt_rounds=4)


@pytest.mark.unit
class TestCreateUser:

    def test_fresh_registration(self, store):
        user = store.create_user('ada@example.com', 'correct-horse', username='ada')

        assert user.id is not None
        assert user.email == 'ada@example.com'
        assert user.username == 'ada'
        assert user.email_verified is False
        assert user.google_id is None
        assert user.password_hash != 'correct-horse'
        assert user.check_password('correct-horse')

    def test_duplicate_email_rejected_regardless_of_other_fields(self, store):
        store.create_user('ada@example.com', 'correct-horse', username='ada')

        with pytest.raises(DuplicateEmailError):
            store.create_user('ada@example.com', 'another-password', username='someone-else')

    def test_duplicate_username_rejected(self, store):
        store.create_user('ada@example.com', 'correct-horse', username='ada')

        with pytest.raises(DuplicateUsernameError):
            store.create_user('grace@example.com', 'correct-horse', username='ada')

    def test_users_without_username_do_not_collide(self, store):
        store.create_user('a@example.com', 'password-1')
        store.create_user('b@example.com', 'password-2')

        assert store.get_user_by_username('') is None
        assert store.get_user_by_username(None) is None


@pytest.mark.unit
class TestVerifyPassword:

    def test_correct_password(self, store):
        created = store.create_user('ada@example.com', 'correct-horse')
        assert store.verify_password('ada@example.com', 'correct-horse').id == created.id

    def test_wrong_password(self, store):
        store.create_user('ada@example.com', 'correct-horse')
        assert store.verify_password('ada@example.com', 'wrong-horse') is None

    def test_unknown_email(self, store):
        assert store.verify_password('nobody@example.com', 'whatever') is None

    def test_oauth_only_user_never_verifies(self, store):
        store.create_oauth_user('g@example.com', google_id='g-1')
        assert store.verify_password('g@example.com', '') is None
        assert store.verify_password('g@example.com', 'anything') is None


@pytest.mark.unit
class TestOAuthUsers:

    def test_create_oauth_user(self, store):
        user = store.create_oauth_user('g@example.com', google_id='g-1', first_name='Grace', avatar='https://img')

        assert user.google_id == 'g-1'
        assert user.password_hash is None
        assert user.email_verified is True
        assert store.get_user_by_google_id('g-1').id == user.id

    def test_idempotent_for_same_identity(self, store):
        first = store.create_oauth_user('g@example.com', google_id='g-1')
        second = store.create_oauth_user('g@example.com', google_id='g-1')
        assert first.id == second.id

    def test_links_existing_password_account_by_email(self, store):
        password_user = store.create_user('ada@example.com', 'correct-horse')

        merged = store.create_oauth_user('ada@example.com', google_id='g-2')

        assert merged.id == password_user.id
        assert merged.google_id == 'g-2'
        assert store.verify_password('ada@example.com', 'correct-horse') is not None

    def test_link_google_account(self, store):
        user = store.create_user('ada@example.com', 'correct-horse')
        store.link_google_account(user.id, 'g-3')
        assert store.get_user_by_google_id('g-3').id == user.id


@pytest.mark.unit
class TestUpdates:

    def test_update_profile(self, store):
        user = store.create_user('ada@example.com', 'correct-horse', username='ada')

        updated = store.update_profile(user.id, first_name='Ada', age=36, bio='Analyst', date_of_birth='1815-12-10')

        assert updated.first_name == 'Ada'
        assert updated.age == 36
        assert updated.bio == 'Analyst'
        assert updated.date_of_birth == '1815-12-10'

    def test_update_profile_ignores_non_profile_fields(self, store):
        user = store.create_user('ada@example.com', 'correct-horse')
        store.update_profile(user.id, email='evil@example.com', password_hash='x')

        reloaded = store.get_user(user.id)
        assert reloaded.email == 'ada@example.com'
        assert reloaded.check_password('correct-horse')

    def test_username_change_must_stay_unique(self, store):
        store.create_user('ada@example.com', 'correct-horse', username='ada')
        grace = store.create_user('grace@example.com', 'correct-horse', username='grace')

        with pytest.raises(DuplicateUsernameError):
            store.update_profile(grace.id, username='ada')

    def test_keeping_own_username_is_allowed(self, store):
        user = store.create_user('ada@example.com', 'correct-horse', username='ada')
        assert store.update_profile(user.id, username='ada', bio='hi').bio == 'hi'

    def test_update_missing_user_returns_none(self, store):
        assert store.update_user(9999, bio='x') is None
        assert store.update_profile(9999, bio='x') is None

    def test_get_user_with_bad_id(self, store):
        assert store.get_user('not-a-number') is None


@pytest.mark.unit
def test_create_user_store_selects_backend():
    assert isinstance(create_user_store({'USER_STORE': 'memory'}), InMemoryUserStore)
    assert isinstance(create_user_store({'USER_STORE': 'database'}), SQLAlchemyUserStore)
    assert create_user_store({'USER_STORE': 'memory', 'BCRYPT_LOG_ROUNDS': 5}).bcrypt_rounds == 5
