from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True)
class ColumnSpec:
    name: str
    label: str
    dtype: str
    nullable: bool = True
    description: Optional[str] = None


@dataclass(frozen=True)
class DatasetSchema:
    name: str
    columns: Sequence[ColumnSpec]
    notes: Optional[str] = None


@dataclass(frozen=True)
class SourceContract:
    name: str
    module: str
    url: str
    shape: str
    markers: Sequence[str]
    notes: Optional[str] = None


FUND_RECORD_SCHEMA = DatasetSchema(
    name="nav_data",
    columns=[
        ColumnSpec("source", "Source", "text", nullable=False),
        ColumnSpec("category", "Category", "text", nullable=False),
        ColumnSpec("fund_name", "Fund Name", "text", nullable=False),
        ColumnSpec("short_code", "Short Name", "text", nullable=False),
        ColumnSpec("as_of_date", "Date", "date"),
        ColumnSpec("nav", "NAV", "decimal"),
        ColumnSpec("change", "Change", "decimal"),
        ColumnSpec(
            "change_percent",
            "% Change",
            "decimal",
            description="Dao Investment reports the currency change here, not a percentage.",
        ),
        ColumnSpec("bid_price", "Bid", "decimal"),
        ColumnSpec("offer_price", "Offer", "decimal"),
        ColumnSpec("total_net_assets", "Total Net Asset", "decimal"),
    ],
    notes="Export column order. Currency is carried on the record but not exported.",
)

SOURCE_CONTRACTS = [
    SourceContract(
        name="Talis AM",
        module="nav_scraping/extractors/talis.py",
        url="https://nav.talisam.co.th/index_NAV_Sum.jsp?p_lang=EN",
        shape="html-tables",
        markers=[
            "Pre-warm GET of the site root for session cookies.",
            "HTTP 423 means locked; retry after ~2s, at most 3 attempts.",
            "Every <table>; columns resolved from English/Thai header labels.",
        ],
        notes="Category comes from the nearest fund-class heading before each table.",
    ),
    SourceContract(
        name="Kasikorn Asset",
        module="nav_scraping/extractors/kasset.py",
        url="https://www.kasikornasset.com/kasset/th/mutual-fund/investment-policy/Pages/index.aspx",
        shape="embedded-json",
        markers=[
            "<input id='hdnxx'> value holds HTML-encoded JSON.",
            "[{category_id, table_fund: [{FND_CD, FND_DSC_TH, R18_NAV, R18_NAV_PAST, ...}]}]",
        ],
        notes="Change and percent change are derived from R18_NAV and R18_NAV_PAST.",
    ),
    SourceContract(
        name="Asset Plus",
        module="nav_scraping/extractors/asset_plus.py",
        url="https://www.assetfund.co.th/home/funds-price.aspx",
        shape="html-table",
        markers=[
            "table.table.border-white with repeated <thead>/<tbody> pairs.",
            "10 columns; dates as dd/MM/yy Buddhist years.",
        ],
    ),
    SourceContract(
        name="LH Fund",
        module="nav_scraping/extractors/lh_fund.py",
        url="https://www.lhfund.co.th/MutualFund/FundNav",
        shape="html-table",
        markers=[
            "table.table-nav; per <tbody> a tr.captions row with an <h3> category.",
            "8 columns; dates as dd/MM/yyyy.",
        ],
    ),
    SourceContract(
        name="MFC Fund",
        module="nav_scraping/extractors/mfc.py",
        url="https://mfcfund.com/unit-value/",
        shape="rest-json",
        markers=[
            "POST with empty body; envelope field NAVFund.",
            "Total_AssetSize is a numeric string, NAV fields are JSON numbers.",
        ],
        notes="No categories; every record is filed under 'Mutual Fund'.",
    ),
    SourceContract(
        name="Dao Investment",
        module="nav_scraping/extractors/dao.py",
        url="https://www.daolinvestment.co.th/mutual-fund/info/nav",
        shape="html-grid",
        markers=[
            "table.MuiTable-root; category span.MuiTypography-header2 in the container.",
            "td.fundName with an <h6>; td.nav, td.sellPrice, td.buyPrice, td.changes, td.totalNav.",
        ],
        notes="Percent change mirrors the currency change.",
    ),
]

SOURCE_CONTRACTS_BY_NAME = {c.name: c for c in SOURCE_CONTRACTS}
