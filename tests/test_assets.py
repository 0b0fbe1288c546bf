"""Tests for logo/signature handle lifetime."""
from citations.rendering.assets import AssetStore


def test_replace_releases_previous_handle(png_bytes):
    store = AssetStore()
    first = store.logo.replace(png_bytes, "logo.png")
    assert first.path.exists()

    second = store.logo.replace(png_bytes, "logo2.jpg")

    assert not first.path.exists()
    assert second.path.exists()
    assert second.path.suffix == ".jpg"
    store.close()
    assert not second.path.exists()


def test_clearing_upload_releases_handle(png_bytes):
    store = AssetStore()
    handle = store.signature.replace(png_bytes, "firma.png")

    assert store.signature.replace(None) is None
    assert store.signature.handle is None
    assert not handle.path.exists()


def test_store_context_releases_all(png_bytes):
    with AssetStore() as store:
        logo = store.logo.replace(png_bytes, "logo.png")
        signature = store.signature.replace(png_bytes, "firma.png")
        assert logo.open_image().size == (40, 20)

    assert not logo.path.exists()
    assert not signature.path.exists()
    store.close()


def test_unreferenced_store_releases_its_files(png_bytes):
    import gc

    store = AssetStore()
    logo = store.logo.replace(png_bytes, "logo.png")
    signature = store.signature.replace(png_bytes, "firma.png")

    del store
    gc.collect()

    assert not logo.path.exists()
    assert not signature.path.exists()
