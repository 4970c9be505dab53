#!/usr/bin/env python3
"""Tests for the error collector, property container, naming grammar, and store registry."""

import unittest

from pipeline_artifacts.domain.configuration import (
    CONFIGURATION_KEY,
    Configuration,
    ConfigurationProperty,
)
from pipeline_artifacts.domain.errors import ConfigErrors
from pipeline_artifacts.domain.naming import NameTypeValidator
from pipeline_artifacts.stores.registry import ArtifactStore, ArtifactStores, ValidationContext


class TestConfigErrors(unittest.TestCase):
    """Field-keyed error collection behavior."""

    def test_messages_are_grouped_by_field_in_order(self):
        errors = ConfigErrors()
        errors.add("id", "first")
        errors.add("storeId", "second")
        errors.add("id", "third")

        self.assertEqual(errors.fields(), ["id", "storeId"])
        self.assertEqual(errors.get_all_on("id"), ["first", "third"])
        self.assertEqual(errors.on("storeId"), "second")
        self.assertEqual(errors.all_messages(), ["first", "third", "second"])
        self.assertEqual(errors.first_error(), "first")

    def test_repeated_message_is_kept_once(self):
        errors = ConfigErrors()
        errors.add("id", "duplicate")
        errors.add("id", "duplicate")
        self.assertEqual(errors.as_dict(), {"id": ["duplicate"]})

    def test_empty_and_clear(self):
        errors = ConfigErrors()
        self.assertTrue(errors.is_empty())
        self.assertIsNone(errors.on("id"))
        self.assertEqual(errors.get_all_on("id"), [])

        errors.add("id", "boom")
        self.assertFalse(errors.is_empty())
        self.assertIn("id", errors)

        errors.clear()
        self.assertTrue(errors.is_empty())


class TestConfiguration(unittest.TestCase):
    """Property container semantics."""

    def test_equality_ignores_order_but_not_size(self):
        left = Configuration([ConfigurationProperty("a", "1"), ConfigurationProperty("b", "2")])
        right = Configuration([ConfigurationProperty("b", "2"), ConfigurationProperty("a", "1")])
        self.assertEqual(left, right)
        self.assertEqual(hash(left), hash(right))

        right.add_new("c", "3")
        self.assertNotEqual(left, right)
        self.assertTrue(right.contains_all(left))
        self.assertFalse(left.contains_all(right))

    def test_property_equality_uses_key_and_value(self):
        self.assertEqual(ConfigurationProperty("k", "v"), ConfigurationProperty("k", "v", secure=True))
        self.assertNotEqual(ConfigurationProperty("k", "v"), ConfigurationProperty("k", "w"))
        self.assertNotEqual(ConfigurationProperty("k", "v"), ConfigurationProperty("K", "v"))

    def test_as_map_masks_secure_values_unless_resolved(self):
        configuration = Configuration()
        configuration.add_new("Bucket", "releases")
        configuration.add_new("SecretKey", "hunter2", secure=True)

        self.assertEqual(configuration.as_map(), {"Bucket": "releases", "SecretKey": "****"})
        self.assertEqual(
            configuration.as_map(resolve_secure=True), {"Bucket": "releases", "SecretKey": "hunter2"}
        )
        self.assertEqual(configuration.list_of_keys(), ["Bucket", "SecretKey"])

    def test_duplicate_keys_are_flagged_case_insensitively(self):
        first = ConfigurationProperty("Path", "a")
        second = ConfigurationProperty("path", "b")
        other = ConfigurationProperty("Bucket", "c")
        configuration = Configuration([first, other, second])

        configuration.validate_uniqueness("Pluggable Artifact")

        self.assertEqual(first.errors().on(CONFIGURATION_KEY), "Duplicate key 'path' found for Pluggable Artifact")
        self.assertEqual(second.errors().on(CONFIGURATION_KEY), "Duplicate key 'path' found for Pluggable Artifact")
        self.assertFalse(other.has_errors())
        self.assertTrue(configuration.has_errors())

        configuration.clear_errors()
        self.assertFalse(configuration.has_errors())

    def test_get_property(self):
        configuration = Configuration([ConfigurationProperty("Path", "dist/")])
        self.assertEqual(configuration.get_property("Path").value, "dist/")
        self.assertIsNone(configuration.get_property("Missing"))


class TestNameTypeValidator(unittest.TestCase):
    """Naming grammar checks."""

    def test_valid_names(self):
        validator = NameTypeValidator()
        for name in ["installer", "s3-store", "my_artifact.v2", "_hidden", "0", "a" * 255]:
            self.assertTrue(validator.is_name_valid(name), name)

    def test_invalid_names(self):
        validator = NameTypeValidator()
        for name in [None, "", ".starts-with-period", "has space", "slash/name", "trailing\n", "a" * 256]:
            self.assertFalse(validator.is_name_valid(name), repr(name))

    def test_error_message_format(self):
        self.assertEqual(
            NameTypeValidator.error_message("pluggable artifact id", "bad id"),
            "Invalid pluggable artifact id name 'bad id'. This must be alphanumeric and can contain "
            "underscores, hyphens and periods (however, it cannot start with a period). "
            "The maximum allowed length is 255 characters.",
        )


class TestArtifactStores(unittest.TestCase):
    """Store registry lookups."""

    def test_find_matches_exact_id(self):
        stores = ArtifactStores([ArtifactStore(id="s3", plugin_id="cd.go.artifact.s3")])
        context = ValidationContext(stores)

        self.assertEqual(context.artifact_stores().find("s3").plugin_id, "cd.go.artifact.s3")
        self.assertIsNone(context.artifact_stores().find("S3"))
        self.assertIsNone(context.artifact_stores().find("docker"))
        self.assertEqual(stores.ids(), ["s3"])

    def test_context_keeps_an_empty_registry_it_was_given(self):
        stores = ArtifactStores()
        context = ValidationContext(stores)
        stores.add(ArtifactStore(id="s1", plugin_id="cd.go.artifact.s3"))

        self.assertIs(context.artifact_stores(), stores)
        self.assertEqual(context.artifact_stores().find("s1").id, "s1")

    def test_empty_containers_are_kept_as_given(self):
        configuration = Configuration([])
        configuration.add_new("k", "v")
        self.assertEqual(configuration.list_of_keys(), ["k"])
        self.assertEqual(len(ArtifactStores([])), 0)

    def test_default_context_has_no_stores(self):
        self.assertEqual(len(ValidationContext().artifact_stores()), 0)


if __name__ == "__main__":
    unittest.main()
