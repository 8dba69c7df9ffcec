"""Tests for TreeConfig and load_config()."""

import pytest

from treeforge import DEFAULT_CONFIG, ConfigError, TreeConfig, load_config


class TestTreeConfig:
    """Tests for TreeConfig."""

    def test_defaults(self):
        """Test default field bindings and policies."""
        config = TreeConfig()

        assert config.id_key == "id"
        assert config.parent_id_key == "parent_id"
        assert config.name_key == "name"
        assert config.weight_key == "weight"
        assert config.children_key == "children"
        assert config.max_depth is None
        assert config.sort_children is True
        assert config.strict_parents is False
        assert config.skip_invalid is False
        assert DEFAULT_CONFIG == config

    def test_from_dict_snake_case(self):
        """Test building from snake_case keys."""
        config = TreeConfig.from_dict({"id_key": "code", "max_depth": 3})

        assert config.id_key == "code"
        assert config.max_depth == 3

    def test_from_dict_camel_case(self):
        """Test the camelCase spellings."""
        config = TreeConfig.from_dict({"parentIdKey": "pid", "childrenKey": "kids", "deep": 2})

        assert config.parent_id_key == "pid"
        assert config.children_key == "kids"
        assert config.max_depth == 2

    def test_from_dict_unknown_key(self):
        """Test that unknown keys are rejected."""
        with pytest.raises(ConfigError, match="Unknown tree config key"):
            TreeConfig.from_dict({"colour": "red"})

    def test_frozen(self):
        """Test that configs cannot be changed in place."""
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.max_depth = 3

    def test_replace(self):
        """Test deriving a changed copy."""
        config = DEFAULT_CONFIG.replace(strict_parents=True)

        assert config.strict_parents is True
        assert DEFAULT_CONFIG.strict_parents is False

    @pytest.mark.parametrize(
        "changes, message",
        [
            ({"max_depth": -1}, "must not be negative"),
            ({"max_depth": "3"}, "must be an int"),
            ({"max_depth": True}, "must be an int"),
            ({"id_key": ""}, "non-empty"),
            ({"parent_id_key": "id"}, "distinct"),
            ({"child_predicate": "yes"}, "child_predicate must be callable"),
            ({"weight_comparator": 1}, "weight_comparator must be callable"),
            (
                {"weight_comparator": lambda a, b: 0, "sort_children": False},
                "sort_children is disabled",
            ),
        ],
    )
    def test_validate(self, changes, message):
        """Test rejection of invalid or conflicting values."""
        with pytest.raises(ConfigError, match=message):
            TreeConfig(**changes).validate()

    def test_config_error_is_value_error(self):
        """Test that ConfigError can be caught as ValueError."""
        with pytest.raises(ValueError):
            TreeConfig.from_dict({"max_depth": -5})


class TestLoadConfig:
    """Tests for load_config()."""

    def test_load_tree_table(self, tmp_path):
        """Test reading the [tree] table."""
        path = tmp_path / "tree.toml"
        path.write_text(
            '[tree]\nidKey = "code"\nparent_id_key = "parent_code"\nmax_depth = 4\n'
            "strict_parents = true\n",
            encoding="utf-8",
        )

        config = load_config(path)

        assert config.id_key == "code"
        assert config.parent_id_key == "parent_code"
        assert config.max_depth == 4
        assert config.strict_parents is True

    def test_other_section(self, tmp_path):
        """Test reading a differently named table."""
        path = tmp_path / "settings.toml"
        path.write_text("[menus]\nname_key = \"title\"\n", encoding="utf-8")

        assert load_config(path, section="menus").name_key == "title"

    def test_missing_section(self, tmp_path):
        """Test that an absent table gives defaults."""
        path = tmp_path / "empty.toml"
        path.write_text("[other]\nx = 1\n", encoding="utf-8")

        assert load_config(path) is DEFAULT_CONFIG

    def test_invalid_toml(self, tmp_path):
        """Test that unparsable files raise ConfigError."""
        path = tmp_path / "bad.toml"
        path.write_text("[tree\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="Cannot parse"):
            load_config(path)

    def test_section_not_a_table(self, tmp_path):
        """Test that a scalar in place of the table is rejected."""
        path = tmp_path / "scalar.toml"
        path.write_text('tree = "yes"\n', encoding="utf-8")

        with pytest.raises(ConfigError, match="must be a table"):
            load_config(path)

    def test_invalid_value(self, tmp_path):
        """Test that loaded values are validated."""
        path = tmp_path / "neg.toml"
        path.write_text("[tree]\nmax_depth = -2\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_config(path)
