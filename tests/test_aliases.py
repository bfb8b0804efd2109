"""Tests for alias resolution."""

import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

from awsconsole.aliases import (
    DEFAULT_LOCATIONS,
    DEFAULT_POLICIES,
    AliasConfig,
    AliasResolver,
)
from awsconsole.errors import ConfigError


class TestResolveLocation(unittest.TestCase):
    """Test location alias resolution."""

    def setUp(self):
        self.resolver = AliasResolver.default()

    def test_https_url_is_returned_verbatim(self):
        url, found = self.resolver.resolve_location(
            "https://example.com/x", "c.example.com", "us-east-1"
        )
        self.assertTrue(found)
        self.assertEqual(url, "https://example.com/x")

    def test_https_url_bypasses_table_with_same_name(self):
        resolver = AliasResolver(locations={"https://a": "https://b/{region}"})
        url, found = resolver.resolve_location("https://a", "c", "r")
        self.assertTrue(found)
        self.assertEqual(url, "https://a")

    def test_home_alias_substitutes_placeholders(self):
        url, found = self.resolver.resolve_location(
            "home", "console.aws.amazon.com", "us-west-2"
        )
        self.assertTrue(found)
        self.assertNotIn("{region}", url)
        self.assertNotIn("{console}", url)
        self.assertIn("us-west-2", url)
        self.assertIn("console.aws.amazon.com", url)
        self.assertEqual(
            url,
            "https://us-west-2.console.aws.amazon.com/console/home?region=us-west-2",
        )

    def test_every_default_location_resolves_to_https(self):
        for alias in DEFAULT_LOCATIONS:
            url, found = self.resolver.resolve_location(
                alias, "console.amazonaws.cn", "cn-north-1"
            )
            self.assertTrue(found, alias)
            self.assertTrue(url.startswith("https://"), alias)
            self.assertNotIn("{", url, alias)

    def test_unknown_alias_is_not_found(self):
        url, found = self.resolver.resolve_location(
            "not-a-real-alias", "console.aws.amazon.com", "us-east-1"
        )
        self.assertFalse(found)
        self.assertEqual(url, "")

    def test_alias_lookup_is_case_sensitive(self):
        _, found = self.resolver.resolve_location("IAM", "c", "r")
        self.assertFalse(found)

    def test_plain_http_is_not_treated_as_url(self):
        _, found = self.resolver.resolve_location("http://example.com", "c", "r")
        self.assertFalse(found)

    def test_injected_table(self):
        resolver = AliasResolver(locations={"x": "https://{console}/x?r={region}"})
        url, found = resolver.resolve_location("x", "c.example.com", "eu-west-1")
        self.assertTrue(found)
        self.assertEqual(url, "https://c.example.com/x?r=eu-west-1")

        _, found = resolver.resolve_location("home", "c.example.com", "eu-west-1")
        self.assertFalse(found)


class TestResolvePolicy(unittest.TestCase):
    """Test policy alias resolution."""

    def setUp(self):
        self.resolver = AliasResolver.default()

    def test_admin_alias(self):
        self.assertEqual(
            self.resolver.resolve_policy("admin", "aws"),
            "arn:aws:iam::aws:policy/AdministratorAccess",
        )

    def test_alias_in_other_partition(self):
        self.assertEqual(
            self.resolver.resolve_policy("readonly", "aws-us-gov"),
            "arn:aws-us-gov:iam::aws:policy/ReadOnlyAccess",
        )

    def test_literal_arn_passes_through(self):
        arn = "arn:aws:iam::123:policy/Custom"
        self.assertEqual(self.resolver.resolve_policy(arn, "aws"), arn)

    def test_literal_with_placeholder_is_substituted(self):
        self.assertEqual(
            self.resolver.resolve_policy("arn:{partition}:iam::123:policy/X", "aws-cn"),
            "arn:aws-cn:iam::123:policy/X",
        )

    def test_resolvers_do_not_share_tables(self):
        custom = AliasResolver(policies={"admin": "arn:{partition}:iam::1:policy/A"})
        self.assertEqual(
            custom.resolve_policy("admin", "aws"), "arn:aws:iam::1:policy/A"
        )
        self.assertEqual(
            AliasResolver.default().resolve_policy("admin", "aws"),
            "arn:aws:iam::aws:policy/AdministratorAccess",
        )
        self.assertEqual(
            DEFAULT_POLICIES["admin"], "arn:{partition}:iam::aws:policy/AdministratorAccess"
        )


class TestAliasConfig(unittest.TestCase):
    """Test loading alias tables from YAML."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.config_file = os.path.join(self.temp_dir, "aliases.yaml")

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def write(self, content):
        with open(self.config_file, "w") as f:
            f.write(content)

    def test_from_yaml_merges_over_defaults(self):
        self.write(
            "locations:\n"
            "  logs: 'https://{region}.{console}/cloudwatch/home#logsV2:'\n"
            "policies:\n"
            "  admin: 'arn:{partition}:iam::123456789012:policy/Admin'\n"
        )
        resolver = AliasResolver.from_yaml(self.config_file)

        url, found = resolver.resolve_location("logs", "console.aws.amazon.com", "us-east-1")
        self.assertTrue(found)
        self.assertEqual(url, "https://us-east-1.console.aws.amazon.com/cloudwatch/home#logsV2:")

        _, found = resolver.resolve_location("iam", "console.aws.amazon.com", "us-east-1")
        self.assertTrue(found)

        self.assertEqual(
            resolver.resolve_policy("admin", "aws"),
            "arn:aws:iam::123456789012:policy/Admin",
        )
        self.assertEqual(
            resolver.resolve_policy("ro", "aws"),
            "arn:aws:iam::aws:policy/ReadOnlyAccess",
        )

    def test_from_yaml_empty_file(self):
        self.write("")
        resolver = AliasResolver.from_yaml(self.config_file)
        self.assertEqual(resolver.locations, DEFAULT_LOCATIONS)

    def test_from_yaml_resolves_env_variables(self):
        self.write("policies:\n  dev: '${DEV_POLICY}'\n")
        with patch.dict(os.environ, {"DEV_POLICY": "arn:aws:iam::1:policy/Dev"}):
            resolver = AliasResolver.from_yaml(self.config_file)
        self.assertEqual(resolver.resolve_policy("dev", "aws"), "arn:aws:iam::1:policy/Dev")

    def test_from_yaml_unset_env_variable(self):
        self.write("policies:\n  dev: '${AWS_CONSOLE_TEST_UNSET_VARIABLE}'\n")
        os.environ.pop("AWS_CONSOLE_TEST_UNSET_VARIABLE", None)
        with self.assertRaises(ConfigError):
            AliasResolver.from_yaml(self.config_file)

    def test_from_yaml_missing_file(self):
        with self.assertRaises(ConfigError):
            AliasResolver.from_yaml(os.path.join(self.temp_dir, "missing.yaml"))

    def test_from_yaml_invalid_yaml(self):
        self.write("locations: [unclosed\n")
        with self.assertRaises(ConfigError):
            AliasResolver.from_yaml(self.config_file)

    def test_from_yaml_invalid_schema(self):
        self.write("locations:\n  - not\n  - a\n  - mapping\n")
        with self.assertRaises(ConfigError):
            AliasResolver.from_yaml(self.config_file)

    def test_from_yaml_directory(self):
        with self.assertRaises(ConfigError):
            AliasResolver.from_yaml(self.temp_dir)

    def test_alias_config_defaults(self):
        config = AliasConfig()
        self.assertEqual(config.locations, {})
        self.assertEqual(config.policies, {})


if __name__ == "__main__":
    unittest.main()
