"""
Tests pour l'entite CatalogItem.
"""

from mediashelf.core.entities import CatalogItem, Material


class TestMatchTitles:
    """Tests des titres utilises pour le matching."""

    def test_title_original_and_aliases(self):
        item = CatalogItem(
            title="流浪地球",
            original_title="The Wandering Earth",
            aliases=["Liu Lang Di Qiu"],
        )

        assert item.match_titles() == ["流浪地球", "The Wandering Earth", "Liu Lang Di Qiu"]

    def test_blank_and_duplicate_titles_ignored(self):
        item = CatalogItem(title=" Inception ", original_title="Inception", aliases=["", "  "])

        assert item.match_titles() == ["Inception"]

    def test_no_title(self):
        assert CatalogItem().match_titles() == []


class TestMaterials:
    """Tests de la recherche des materiaux par chemin."""

    def test_find_by_path(self):
        material = Material(id="m1", name="a.mkv", path="/media/a.mkv")
        item = CatalogItem(title="x", materials=[material])

        assert item.find_material_by_path("/media/a.mkv") is material
        assert item.find_material_by_path("/media/b.mkv") is None
        assert item.has_material_path("/media/a.mkv")
        assert item.material_paths() == {"/media/a.mkv"}

    def test_default_lists_not_shared(self):
        first = CatalogItem(title="a")
        second = CatalogItem(title="b")
        first.materials.append(Material(id="m1", name="a.mkv", path="/a.mkv"))

        assert second.materials == []
