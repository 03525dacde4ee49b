def test_all_in_catalog_order(catalog):
    assert [g.id for g in catalog.all()] == list(range(1, 10))


def test_get(catalog):
    assert catalog.get(4).name == "Carrier 60L"
    assert catalog.get(404) is None


def test_search_by_name_case_insensitive(catalog):
    assert [g.id for g in catalog.search("  tenda ")] == [1, 5]


def test_search_matches_category(catalog):
    assert [g.id for g in catalog.search("cooking")] == [3, 8]


def test_search_with_category_filter(catalog):
    assert [g.id for g in catalog.search("", "lighting")] == [5, 9]
    assert [g.id for g in catalog.search("head", "Lighting")] == [9]


def test_empty_query_returns_everything(catalog):
    assert len(catalog.search()) == len(catalog.all())


def test_categories_first_seen_order(catalog):
    assert catalog.categories() == ["Shelter", "Sleeping", "Cooking", "Packs", "Lighting", "Furniture"]
