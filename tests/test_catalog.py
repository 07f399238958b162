"""Tests for the asset catalog.

Tests natural sort ordering, display formatting, label resolution, directory
listing and the filesystem asset store.
"""

import pytest

from nftgen.catalog import (
    Asset,
    FileSystemAssetStore,
    format_property,
    list_assets,
    natural_compare,
    natural_sort,
    options_for,
    resolve,
    trim_property,
)
from nftgen.errors import AssetNotFound

from conftest import MemoryAssetStore, make_png


# ============================================================================
# Natural Sort Tests
# ============================================================================

def test_natural_sort_numeric_runs():
    """Test digit runs compare by value, not lexically."""
    assert natural_sort(['item2', 'item10', 'item1']) == ['item1', 'item2', 'item10']


def test_natural_sort_zero_padding_tiebreak():
    """Test equal numeric values sort the zero-padded form last."""
    assert natural_sort(['a-02-b', 'a-2-b']) == ['a-2-b', 'a-02-b']
    assert natural_sort(['a-2-b', 'a-02-b']) == ['a-2-b', 'a-02-b']


def test_natural_compare_leading_zeros_by_value():
    """Test leading zeros are ignored when values differ."""
    assert natural_compare('file007', 'file10') < 0
    assert natural_compare('file10', 'file007') > 0


def test_natural_compare_equal():
    """Test identical names compare equal."""
    assert natural_compare('option-1.png', 'option-1.png') == 0


def test_natural_compare_digit_run_before_text_run():
    """Test a digit run sorts before a non-digit run at the same position."""
    assert natural_compare('1x', '-x') < 0
    assert natural_compare('-x', '1x') > 0


def test_natural_compare_prefix_falls_back_to_lexical():
    """Test names whose common runs all match compare lexically."""
    assert natural_compare('option-1', 'option-1.png') < 0
    assert natural_sort(['option-1.png', 'option-1']) == ['option-1', 'option-1.png']


def test_natural_compare_ignores_spaces():
    """Test spaces do not split runs."""
    assert natural_compare('item 2', 'item10') < 0


def test_natural_sort_realistic_listing():
    """Test a typical asset directory listing."""
    names = ['option-10.png', 'option-2.png', 'option-1.png', 'option-1a.png', 'option-01.png']
    assert natural_sort(names) == [
        'option-1.png',
        'option-1a.png',
        'option-01.png',
        'option-2.png',
        'option-10.png',
    ]


def test_natural_sort_is_stable_across_calls():
    """Test repeated sorts of the same names agree."""
    names = ['b3', 'a10', 'a2', 'b03', 'a2x']
    assert natural_sort(names) == natural_sort(list(reversed(names)))


# ============================================================================
# Display Formatting Tests
# ============================================================================

def test_format_property_hyphens_and_case():
    """Test hyphens become spaces and words are title-cased."""
    assert format_property('trait-one-a') == 'Trait One A'
    assert format_property('TRAIT-one') == 'Trait One'


def test_format_property_after_trim():
    """Test formatting a full asset path after trimming."""
    assert format_property(trim_property('data/male/trait-one-a.png')) == 'Trait One A'


def test_format_property_2d_unchanged():
    """Test the 2D token is left as-is."""
    assert format_property(trim_property('2D.png')) == '2D'
    assert format_property('2D') == '2D'


def test_format_property_digit_suffix_not_capitalized():
    """Test only the first character of a word is capitalized."""
    assert format_property('option-1a') == 'Option 1a'


@pytest.mark.parametrize('raw', [
    'trait-one-a', 'Option 1a', '2D', '2d', 'MIXED-case-Name', 'already Formatted', '',
    'ßeta-one', 'straße', 'ǆemal-trait',
])
def test_format_property_idempotent(raw):
    """Test formatting twice equals formatting once."""
    assert format_property(format_property(raw)) == format_property(raw)


def test_format_property_multi_char_uppercase():
    """Test letters with a multi-character uppercase use their titlecase form."""
    assert format_property('ßeta-one') == 'Sseta One'
    assert format_property('straße') == 'Straße'


def test_resolve_non_ascii_label():
    """Test a label drawn from a table resolves to its non-ASCII asset."""
    options = [Asset('traits/ßeta-one.png', 'traits')]
    assert resolve(options, 'Sseta One') is options[0]


def test_trim_property():
    """Test directory and extension are stripped."""
    assert trim_property('backgrounds/composite-trait-one/option-1.png') == 'option-1'
    assert trim_property('option-1') == 'option-1'


# ============================================================================
# Listing and Resolution Tests
# ============================================================================

@pytest.fixture
def store():
    """Store with a small category directory."""
    return MemoryAssetStore({
        'traits/option-10.png': b'10',
        'traits/option-2.png': b'2',
        'traits/option-1.png': b'1',
        'traits/option-1/option-1a.png': b'1a',
    })


def test_list_assets_natural_order(store):
    """Test listing returns assets in natural order with category set."""
    assets = list_assets(store, 'traits')
    assert [a.path for a in assets] == [
        'traits/option-1',
        'traits/option-1.png',
        'traits/option-2.png',
        'traits/option-10.png',
    ]
    assert all(a.category_dir == 'traits' for a in assets)


def test_asset_properties():
    """Test derived name, stem and label."""
    asset = Asset('male/trait-one-options/option-3.png', 'male/trait-one-options')
    assert asset.name == 'option-3.png'
    assert asset.stem == 'option-3'
    assert asset.label == 'Option 3'


def test_resolve_first_match(store):
    """Test resolution returns the first matching asset in listing order."""
    assets = list_assets(store, 'traits')
    assert resolve(assets, 'Option 2').path == 'traits/option-2.png'
    assert resolve(assets, 'Option 1') is assets[0]


def test_resolve_missing_label_raises(store):
    """Test an unknown label raises AssetNotFound."""
    with pytest.raises(AssetNotFound, match='Option 7'):
        resolve(list_assets(store, 'traits'), 'Option 7')


def test_resolve_empty_options_raises():
    """Test resolving against no assets raises AssetNotFound."""
    with pytest.raises(AssetNotFound):
        resolve([], 'Option 1')


def test_options_for_independent(store):
    """Test independent categories list their own directory."""
    options = options_for(store, 'traits')
    assert store.listed == ['traits']
    assert len(options) == 4


def test_options_for_dependent_scoped_to_parent_stem(store):
    """Test dependent categories list the parent-named subdirectory."""
    parent = Asset('traits/option-1.png', 'traits')
    options = options_for(store, 'traits', parent)
    assert store.listed == ['traits/option-1']
    assert [a.path for a in options] == ['traits/option-1/option-1a.png']


def test_options_for_dependent_lowercases_parent_stem(store):
    """Test a capitalized parent filename still finds the lowercase directory."""
    parent = Asset('traits/Option-1.png', 'traits')
    options = options_for(store, 'traits', parent)
    assert store.listed == ['traits/option-1']
    assert [a.label for a in options] == ['Option 1a']


# ============================================================================
# Filesystem Store Tests
# ============================================================================

def test_filesystem_store_lists_and_reads(tmp_path):
    """Test the filesystem store lists entry names and reads bytes."""
    category = tmp_path / 'backgrounds' / 'composite-trait-one'
    category.mkdir(parents=True)
    (category / 'option-2.png').write_bytes(make_png((1, 2, 3, 255)))
    (category / 'option-10.png').write_bytes(b'ten')

    fs_store = FileSystemAssetStore(tmp_path)
    assets = list_assets(fs_store, 'backgrounds/composite-trait-one')

    assert [a.name for a in assets] == ['option-2.png', 'option-10.png']
    assert fs_store.read_bytes('backgrounds/composite-trait-one/option-10.png') == b'ten'


def test_filesystem_store_missing_directory(tmp_path):
    """Test listing a missing directory raises AssetNotFound."""
    with pytest.raises(AssetNotFound):
        FileSystemAssetStore(tmp_path).list_entries('nope')


def test_filesystem_store_missing_file(tmp_path):
    """Test reading a missing file raises AssetNotFound."""
    with pytest.raises(AssetNotFound):
        FileSystemAssetStore(tmp_path).read_bytes('nope/missing.png')
