"""Unit tests for module resolution."""

import pytest

from importchain.core.resolver import (
    ModuleResolver,
    is_ignored_specifier,
    split_package_specifier,
)


@pytest.fixture
def resolver():
    return ModuleResolver()


class TestSpecifierHelpers:
    @pytest.mark.parametrize("specifier, expected", [
        ("react", ("react", "")),
        ("lodash/fp/map", ("lodash", "fp/map")),
        ("@scope/pkg", ("@scope/pkg", "")),
        ("@scope/pkg/sub/file", ("@scope/pkg", "sub/file")),
    ])
    def test_split_package_specifier(self, specifier, expected):
        assert split_package_specifier(specifier) == expected

    def test_ignored_specifiers(self):
        assert is_ignored_specifier("data:text/javascript,export default 1")
        assert is_ignored_specifier("https://cdn.example.com/lib.js")
        assert is_ignored_specifier("http://cdn.example.com/lib.js")
        assert not is_ignored_specifier("http-proxy")
        assert not is_ignored_specifier("./data")


class TestRelativeResolution:
    def test_suffix_probing(self, make_files, resolver):
        root = make_files({"src/index.ts": "", "src/util.ts": ""})

        resolved = resolver.resolve("./util", str(root / "src/index.ts"))
        assert resolved == str(root / "src/util.ts")

    def test_literal_path_wins(self, make_files, resolver):
        root = make_files({"src/index.ts": "", "src/a": "", "src/a.ts": ""})

        assert resolver.resolve("./a", str(root / "src/index.ts")) == str(root / "src/a")

    def test_suffix_priority_order(self, make_files, resolver):
        root = make_files({"index.ts": "", "a.ts": "", "a.js": ""})

        assert resolver.resolve("./a", str(root / "index.ts")) == str(root / "a.js")

    def test_directory_index(self, make_files, resolver):
        root = make_files({"src/index.ts": "", "src/components/index.tsx": ""})

        resolved = resolver.resolve("./components", str(root / "src/index.ts"))
        assert resolved == str(root / "src/components/index.tsx")

    def test_parent_directory(self, make_files, resolver):
        root = make_files({"src/app/main.ts": "", "src/lib/db.js": ""})

        resolved = resolver.resolve("../lib/db", str(root / "src/app/main.ts"))
        assert resolved == str(root / "src/lib/db.js")

    def test_absolute_specifier(self, make_files, resolver):
        root = make_files({"src/index.ts": "", "shared/config.json": ""})

        resolved = resolver.resolve(str(root / "shared/config"), str(root / "src/index.ts"))
        assert resolved == str(root / "shared/config.json")

    def test_unresolvable(self, make_files, resolver):
        root = make_files({"src/index.ts": ""})

        assert resolver.resolve("./missing", str(root / "src/index.ts")) is None

    def test_ignored(self, make_files, resolver):
        root = make_files({"index.ts": ""})

        assert resolver.resolve("https://esm.sh/react", str(root / "index.ts")) is None
        assert resolver.resolve("", str(root / "index.ts")) is None


class TestPackageResolution:
    def test_scoped_exports_subpath(self, make_files, resolver):
        root = make_files({
            "src/index.ts": "",
            "node_modules/@scope/pkg/package.json": {"exports": {"./sub": {"import": "./dist/sub.mjs"}}},
            "node_modules/@scope/pkg/dist/sub.mjs": "",
        })

        resolved = resolver.resolve("@scope/pkg/sub", str(root / "src/index.ts"))
        assert resolved == str(root / "node_modules/@scope/pkg/dist/sub.mjs")

    def test_exports_over_main(self, make_files, resolver):
        root = make_files({
            "index.js": "",
            "node_modules/pkg/package.json": {
                "main": "./lib/main.js",
                "exports": {".": {"import": "./esm/index.mjs"}},
            },
            "node_modules/pkg/lib/main.js": "",
            "node_modules/pkg/esm/index.mjs": "",
        })

        resolved = resolver.resolve("pkg", str(root / "index.js"))
        assert resolved == str(root / "node_modules/pkg/esm/index.mjs")

    def test_exports_string_entry(self, make_files, resolver):
        root = make_files({
            "index.js": "",
            "node_modules/pkg/package.json": {"exports": {".": "./lib/entry"}},
            "node_modules/pkg/lib/entry.js": "",
        })

        assert resolver.resolve("pkg", str(root / "index.js")) == str(root / "node_modules/pkg/lib/entry.js")

    def test_exports_require_fallback(self, make_files, resolver):
        root = make_files({
            "index.js": "",
            "node_modules/pkg/package.json": {"exports": {".": {"require": "./cjs/index.cjs"}}},
            "node_modules/pkg/cjs/index.cjs": "",
        })

        assert resolver.resolve("pkg", str(root / "index.js")) == str(root / "node_modules/pkg/cjs/index.cjs")

    def test_exports_nested_conditions(self, make_files, resolver):
        root = make_files({
            "index.js": "",
            "node_modules/pkg/package.json": {
                "exports": {".": {"import": {"types": "./index.d.ts", "default": "./esm/index.mjs"}}},
            },
            "node_modules/pkg/esm/index.mjs": "",
        })

        assert resolver.resolve("pkg", str(root / "index.js")) == str(root / "node_modules/pkg/esm/index.mjs")

    def test_main_fallback(self, make_files, resolver):
        root = make_files({
            "index.js": "",
            "node_modules/pkg/package.json": {"main": "lib/main.js"},
            "node_modules/pkg/lib/main.js": "",
        })

        assert resolver.resolve("pkg", str(root / "index.js")) == str(root / "node_modules/pkg/lib/main.js")

    def test_default_main(self, make_files, resolver):
        root = make_files({
            "index.js": "",
            "node_modules/pkg/package.json": {"name": "pkg"},
            "node_modules/pkg/index.js": "",
        })

        assert resolver.resolve("pkg", str(root / "index.js")) == str(root / "node_modules/pkg/index.js")

    def test_direct_subpath_lookup(self, make_files, resolver):
        root = make_files({
            "index.js": "",
            "node_modules/lodash/fp/map.js": "",
        })

        assert resolver.resolve("lodash/fp/map", str(root / "index.js")) == str(root / "node_modules/lodash/fp/map.js")

    def test_malformed_package_json(self, make_files, resolver):
        root = make_files({
            "index.js": "",
            "node_modules/pkg/package.json": "{ not json",
            "node_modules/pkg/index.ts": "",
        })

        assert resolver.resolve("pkg", str(root / "index.js")) == str(root / "node_modules/pkg/index.ts")

    def test_walks_up_directories(self, make_files, resolver):
        root = make_files({
            "packages/app/src/deep/file.ts": "",
            "node_modules/shared/package.json": {"main": "main.js"},
            "node_modules/shared/main.js": "",
        })

        resolved = resolver.resolve("shared", str(root / "packages/app/src/deep/file.ts"))
        assert resolved == str(root / "node_modules/shared/main.js")

    def test_nearest_node_modules_wins(self, make_files, resolver):
        root = make_files({
            "app/index.js": "",
            "app/node_modules/pkg/index.js": "",
            "node_modules/pkg/index.js": "",
        })

        assert resolver.resolve("pkg", str(root / "app/index.js")) == str(root / "app/node_modules/pkg/index.js")

    def test_missing_package(self, make_files, resolver):
        root = make_files({"index.js": ""})

        assert resolver.resolve("definitely-not-installed", str(root / "index.js")) is None


class TestResolutionCache:
    def test_memoized_until_cleared(self, make_files, resolver):
        root = make_files({"index.ts": "", "a.ts": ""})
        importer = str(root / "index.ts")

        assert resolver.resolve("./a", importer) == str(root / "a.ts")
        (root / "a.ts").unlink()
        assert resolver.resolve("./a", importer) == str(root / "a.ts")

        resolver.clear_cache()
        assert resolver.resolve("./a", importer) is None

    def test_uncached(self, make_files):
        root = make_files({"index.ts": "", "a.ts": ""})
        resolver = ModuleResolver(cache=False)
        importer = str(root / "index.ts")

        assert resolver.resolve("./a", importer) == str(root / "a.ts")
        (root / "a.ts").unlink()
        assert resolver.resolve("./a", importer) is None
