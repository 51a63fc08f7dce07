"""CSV import script — rows land in the medicines table in batches."""

from decimal import Decimal

from sqlalchemy import func, select

from medcatalog.db.session import create_session_factory
from medcatalog.models.medicine import Medicine
from scripts.import_medicines import batched, import_medicines, main

HEADER = (
    "medicine_name,category_name,slug,generic_name,strength,"
    "manufacturer_name,unit,unit_size,price\n"
)
ROWS = (
    "Napa,Tablet,napa-500,Paracetamol,500 mg,Beximco Pharmaceuticals Ltd.,Strip,10,8.00\n"
    "Seclo,Capsule,seclo-20,Omeprazole,20 mg,Square Pharmaceuticals PLC,Strip,10,60\n"
    "Orsaline,Powder,orsaline-n,Oral Rehydration Salts,,SMC,Sachet,n/a,-1\n"
)


def _write_csv(tmp_path, body=ROWS):
    path = tmp_path / "medicines.csv"
    path.write_text(HEADER + body, encoding="utf-8")
    return path


async def _fetch_all(url):
    engine, factory = create_session_factory(url)
    try:
        async with factory() as db:
            result = await db.execute(select(Medicine).order_by(Medicine.id))
            return [m.to_record() for m in result.scalars().all()]
    finally:
        await engine.dispose()


def test_batched_splits_with_remainder():
    assert list(batched(iter(range(5)), 2)) == [[0, 1], [2, 3], [4]]


async def test_import_inserts_parsed_rows(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}"
    inserted = await import_medicines(_write_csv(tmp_path), url, batch_size=2)
    assert inserted == 3

    records = await _fetch_all(url)
    assert [r.name for r in records] == ["Napa", "Seclo", "Orsaline"]
    orsaline = records[2]
    assert orsaline.strength is None
    assert orsaline.unit_size == 1
    assert orsaline.price == Decimal("0")
    assert records[0].manufacturer == "Beximco Pharmaceuticals Ltd."


async def test_reimport_replaces_catalog(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}"
    await import_medicines(_write_csv(tmp_path), url)
    await import_medicines(_write_csv(tmp_path), url)
    assert len(await _fetch_all(url)) == 3


async def test_keep_existing_appends(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}"
    await import_medicines(_write_csv(tmp_path), url)
    extra = tmp_path / "extra.csv"
    extra.write_text(
        HEADER + "Ace,Tablet,ace-500,Paracetamol,500 mg,Square,Strip,10,7\n",
        encoding="utf-8",
    )
    await import_medicines(extra, url, keep_existing=True)

    engine, factory = create_session_factory(url)
    try:
        async with factory() as db:
            total = (await db.execute(select(func.count(Medicine.id)))).scalar_one()
    finally:
        await engine.dispose()
    assert total == 4


def test_main_rejects_missing_file(tmp_path):
    assert main([str(tmp_path / "absent.csv")]) == 1
