import re
import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock

from shopify_api.auth.scopes import AuthScopes
from shopify_api.core.base_types import Config, ConfigParams, LoggerParams
from shopify_api.core.config import (
    default_log_function,
    is_empty,
    mandatory_fields,
    validate_config,
)
from shopify_api.core.errors import ConfigurationError
from shopify_api.core.types import LATEST_API_VERSION, LogSeverity


def _valid_params(**overrides):
    params = {
        "api_key": "k",
        "api_secret_key": "s",
        "host_name": "h.test",
        "scopes": ["read_x"],
    }
    params.update(overrides)
    return params


class TestValidateConfig(unittest.TestCase):

    def test_minimal_input_gets_defaults(self):
        """Test that a minimal valid input is filled in with defaults."""
        config = validate_config(_valid_params())

        self.assertIsInstance(config, Config)
        self.assertEqual(config.api_key, "k")
        self.assertEqual(config.api_secret_key, "s")
        self.assertEqual(config.host_name, "h.test")
        self.assertEqual(config.api_version, LATEST_API_VERSION)
        self.assertEqual(config.host_scheme, "https")
        self.assertTrue(config.is_embedded_app)
        self.assertFalse(config.is_custom_store_app)
        self.assertIsInstance(config.scopes, AuthScopes)
        self.assertEqual(config.scopes, AuthScopes(["read_x"]))
        self.assertIsNone(config.user_agent_prefix)
        self.assertIsNone(config.private_app_storefront_access_token)
        self.assertIsNone(config.custom_shop_domains)
        self.assertIsNone(config.billing)

    def test_default_logger(self):
        config = validate_config(_valid_params())

        self.assertIs(config.logger.log, default_log_function)
        self.assertEqual(config.logger.level, LogSeverity.INFO)
        self.assertFalse(config.logger.http_requests)
        self.assertFalse(config.logger.timestamps)

    def test_all_mandatory_fields_missing(self):
        """Test that every missing field is reported in a fixed order."""
        with self.assertRaises(ConfigurationError) as ctx:
            validate_config({})

        self.assertEqual(ctx.exception.missing, ("api_key", "api_secret_key", "host_name", "scopes"))
        self.assertEqual(
            str(ctx.exception),
            "Cannot initialize library. Missing values for: api_key, api_secret_key, host_name, scopes",
        )

    def test_missing_subset_is_named_exactly(self):
        with self.assertRaises(ConfigurationError) as ctx:
            validate_config(_valid_params(api_key="", host_name=None))

        self.assertEqual(ctx.exception.missing, ("api_key", "host_name"))
        self.assertEqual(str(ctx.exception), "Cannot initialize library. Missing values for: api_key, host_name")

    def test_empty_scopes_are_missing(self):
        with self.assertRaises(ConfigurationError) as ctx:
            validate_config(_valid_params(scopes=[]))

        self.assertEqual(ctx.exception.missing, ("scopes",))

    def test_false_flags_still_require_scopes(self):
        with self.assertRaises(ConfigurationError) as ctx:
            validate_config(_valid_params(scopes=[], is_custom_store_app=False, is_private_app=False))

        self.assertIn("scopes", ctx.exception.missing)

    def test_custom_store_app_without_scopes(self):
        params = _valid_params(is_custom_store_app=True)
        del params["scopes"]

        config = validate_config(params)

        self.assertTrue(config.is_custom_store_app)
        self.assertEqual(len(config.scopes), 0)
        self.assertEqual(config.scopes, AuthScopes([]))

    def test_host_name_trailing_slash_is_stripped(self):
        self.assertEqual(validate_config(_valid_params(host_name="example.com/")).host_name, "example.com")
        self.assertEqual(validate_config(_valid_params(host_name="example.com")).host_name, "example.com")

    def test_only_one_trailing_slash_is_stripped(self):
        config = validate_config(_valid_params(host_name="example.com//"))

        self.assertEqual(config.host_name, "example.com/")

    def test_scopes_instance_is_adopted(self):
        scopes = AuthScopes(["write_products"])

        config = validate_config(_valid_params(scopes=scopes))

        self.assertIs(config.scopes, scopes)

    def test_scopes_string_is_split(self):
        config = validate_config(_valid_params(scopes="read_products, write_orders"))

        self.assertEqual(config.scopes.to_list(), ["read_products", "write_orders"])

    def test_optional_overrides(self):
        billing = {"plan": {"amount": 5}}
        config = validate_config(
            _valid_params(
                host_scheme="http",
                api_version="2022-10",
                is_embedded_app=False,
                user_agent_prefix="my-app",
                private_app_storefront_access_token="token",
                custom_shop_domains=["*.example.io"],
                billing=billing,
            )
        )

        self.assertEqual(config.host_scheme, "http")
        self.assertEqual(config.api_version, "2022-10")
        self.assertFalse(config.is_embedded_app)
        self.assertEqual(config.user_agent_prefix, "my-app")
        self.assertEqual(config.private_app_storefront_access_token, "token")
        self.assertEqual(config.custom_shop_domains, ("*.example.io",))
        self.assertIs(config.billing, billing)

    def test_none_keeps_default(self):
        config = validate_config(_valid_params(host_scheme=None, is_custom_store_app=None))

        self.assertEqual(config.host_scheme, "https")
        self.assertFalse(config.is_custom_store_app)

    def test_logger_is_merged_per_field(self):
        """Test that only the given logger sub-fields are overridden."""
        config = validate_config(_valid_params(logger={"timestamps": True}))

        self.assertTrue(config.logger.timestamps)
        self.assertFalse(config.logger.http_requests)
        self.assertEqual(config.logger.level, LogSeverity.INFO)
        self.assertIs(config.logger.log, default_log_function)

    def test_logger_params_instance(self):
        log = MagicMock()
        config = validate_config(_valid_params(logger=LoggerParams(log=log, level=LogSeverity.DEBUG)))

        self.assertIs(config.logger.log, log)
        self.assertEqual(config.logger.level, LogSeverity.DEBUG)
        self.assertFalse(config.logger.timestamps)

    def test_camel_case_keys(self):
        config = validate_config({
            "apiKey": "k",
            "apiSecretKey": "s",
            "hostName": "h.test/",
            "isCustomStoreApp": True,
            "logger": {"httpRequests": True},
        })

        self.assertEqual(config.host_name, "h.test")
        self.assertTrue(config.is_custom_store_app)
        self.assertTrue(config.logger.http_requests)

    def test_unknown_keys_are_ignored(self):
        config = validate_config(_valid_params(session_storage="memory"))

        self.assertFalse(hasattr(config, "session_storage"))

    def test_single_domain_pattern_is_passed_through(self):
        pattern = re.compile(r".*\.example\.io")

        config = validate_config(_valid_params(custom_shop_domains=pattern))

        self.assertIs(config.custom_shop_domains, pattern)

    def test_domain_list_becomes_tuple(self):
        pattern = re.compile(r".*\.example\.io")

        config = validate_config(_valid_params(custom_shop_domains=["shop.test", pattern]))

        self.assertEqual(config.custom_shop_domains, ("shop.test", pattern))

    def test_unusual_types_are_passed_through(self):
        """Test that non-empty values of unexpected types are kept as given."""
        cases = {
            "billing": ["plan-a", "plan-b"],
            "custom_shop_domains": {"shop": "shop.test"},
            "user_agent_prefix": 42,
            "api_version": 202301,
            "host_scheme": "ftp",
            "private_app_storefront_access_token": b"token",
        }
        for name, value in cases.items():
            with self.subTest(field=name):
                config = validate_config(_valid_params(**{name: value}))
                self.assertIs(getattr(config, name), value)

    def test_unusual_logger_values_are_passed_through(self):
        cases = {
            "level": "debug",
            "http_requests": "yes",
            "timestamps": 1,
        }
        for name, value in cases.items():
            with self.subTest(field=name):
                config = validate_config(_valid_params(logger={name: value}))
                self.assertEqual(getattr(config.logger, name), value)

    def test_logger_given_as_plain_object(self):
        log = MagicMock(return_value=None)

        config = validate_config(_valid_params(logger=SimpleNamespace(log=log, timestamps=True)))

        self.assertIs(config.logger.log, log)
        self.assertTrue(config.logger.timestamps)
        self.assertEqual(config.logger.level, LogSeverity.INFO)
        self.assertFalse(config.logger.http_requests)

    def test_level_name_with_private_app(self):
        log = MagicMock(return_value=None)

        config = validate_config(_valid_params(is_private_app=True, logger={"log": log, "level": "debug"}))

        self.assertTrue(config.is_custom_store_app)
        self.assertEqual(log.call_count, 1)

    def test_config_is_frozen(self):
        config = validate_config(_valid_params())

        with self.assertRaises(AttributeError):
            config.host_name = "other.test"

    def test_accepts_config_params(self):
        config = validate_config(ConfigParams(**_valid_params()))

        self.assertEqual(config.api_key, "k")


class TestPrivateAppDeprecation(unittest.TestCase):

    def setUp(self):
        self.log = MagicMock(return_value=None)

    def _deprecation_calls(self):
        return [c for c in self.log.call_args_list if "[Deprecated | 7.0.0]" in c.args[1]]

    def test_private_app_is_migrated(self):
        params = _valid_params(is_private_app=True, logger={"log": self.log})
        del params["scopes"]

        config = validate_config(params)

        self.assertTrue(config.is_custom_store_app)
        self.assertFalse(hasattr(config, "is_private_app"))
        self.assertEqual(len(self._deprecation_calls()), 1)
        severity, message = self._deprecation_calls()[0].args
        self.assertEqual(severity, LogSeverity.WARNING)
        self.assertIn("is_custom_store_app", message)

    def test_explicit_custom_store_app_wins(self):
        config = validate_config(
            _valid_params(is_private_app=True, is_custom_store_app=False, logger={"log": self.log})
        )

        self.assertFalse(config.is_custom_store_app)
        self.assertEqual(len(self._deprecation_calls()), 1)

    def test_false_private_app_still_warns(self):
        config = validate_config(_valid_params(is_private_app=False, logger={"log": self.log}))

        self.assertFalse(config.is_custom_store_app)
        self.assertEqual(len(self._deprecation_calls()), 1)

    def test_no_warning_without_private_app(self):
        validate_config(_valid_params(logger={"log": self.log}))

        self.log.assert_not_called()

    def test_warning_respects_configured_level(self):
        validate_config(_valid_params(is_private_app=True, logger={"log": self.log, "level": LogSeverity.ERROR}))

        self.log.assert_not_called()

    def test_no_log_when_validation_fails(self):
        with self.assertRaises(ConfigurationError):
            validate_config({"is_private_app": True, "logger": {"log": self.log}})

        self.log.assert_not_called()


class TestMandatoryFields(unittest.TestCase):

    def test_scopes_required_by_default(self):
        self.assertEqual(mandatory_fields(ConfigParams()), ["api_key", "api_secret_key", "host_name", "scopes"])

    def test_custom_store_app_drops_scopes(self):
        self.assertEqual(mandatory_fields(ConfigParams(is_custom_store_app=True)), ["api_key", "api_secret_key", "host_name"])

    def test_private_app_drops_scopes(self):
        self.assertNotIn("scopes", mandatory_fields(ConfigParams(is_private_app=True)))


class TestIsEmpty(unittest.TestCase):

    def test_absent_values(self):
        self.assertTrue(is_empty(None))
        self.assertTrue(is_empty(ConfigParams().api_key))

    def test_strings_and_sequences(self):
        self.assertTrue(is_empty(""))
        self.assertTrue(is_empty([]))
        self.assertTrue(is_empty(()))
        self.assertFalse(is_empty("a"))
        self.assertFalse(is_empty(["read_x"]))

    def test_falsy_scalars_are_present(self):
        self.assertFalse(is_empty(False))
        self.assertFalse(is_empty(0))
        self.assertFalse(is_empty({}))
        self.assertFalse(is_empty(AuthScopes([])))


class TestDefaultLogFunction(unittest.TestCase):

    def test_dispatches_by_severity(self):
        with self.assertLogs("shopify_api", level="DEBUG") as logs:
            default_log_function(LogSeverity.DEBUG, "d")
            default_log_function(LogSeverity.INFO, "i")
            default_log_function(LogSeverity.WARNING, "w")
            default_log_function(LogSeverity.ERROR, "e")

        self.assertEqual(
            [(r.levelname, r.getMessage()) for r in logs.records],
            [("DEBUG", "d"), ("INFO", "i"), ("WARNING", "w"), ("ERROR", "e")],
        )


if __name__ == '__main__':
    unittest.main()
