"""Tests for the nscache exception hierarchy."""

from nscache.exceptions import (
    BusinessException,
    CacheInconsistentException,
    CacheNotInitializedException,
    CorruptEntryException,
    InfrastructureException,
    InvalidKeyException,
    InvalidNamespaceException,
    InvalidPolicyException,
    NsCacheException,
    ValidationException,
)


class TestNsCacheException:
    def test_basic_creation(self):
        exc = NsCacheException("something went wrong")
        assert str(exc) == "something went wrong"
        assert exc.code is None
        assert exc.context == {}

    def test_context_not_shared(self):
        exc = NsCacheException("test")
        exc.context["key"] = "value"
        assert NsCacheException("test2").context == {}


class TestExceptionHierarchy:
    def test_validation_branch(self):
        for cls in (InvalidKeyException, InvalidNamespaceException, InvalidPolicyException):
            assert issubclass(cls, ValidationException)
            assert issubclass(cls, BusinessException)

    def test_infrastructure_branch(self):
        for cls in (CacheNotInitializedException, CacheInconsistentException, CorruptEntryException):
            assert issubclass(cls, InfrastructureException)
            assert issubclass(cls, NsCacheException)


class TestErrorCodes:
    def test_invalid_key(self):
        exc = InvalidKeyException("bad", {"key": "a:b"})
        assert exc.code == "CACHE_INVALID_KEY"
        assert exc.context == {"key": "a:b"}

    def test_not_initialized(self):
        exc = CacheNotInitializedException("users")
        assert exc.code == "CACHE_NOT_INITIALIZED"
        assert "users" in str(exc)

    def test_inconsistent(self):
        exc = CacheInconsistentException("users")
        assert exc.code == "CACHE_NEEDS_REINITIALIZATION"
        assert exc.context == {"namespace": "users"}

    def test_corrupt_entry(self):
        exc = CorruptEntryException("users:_lru", "Expecting value")
        assert exc.code == "CACHE_CORRUPT_ENTRY"
        assert str(exc) == "Corrupt cache data under 'users:_lru': Expecting value"
