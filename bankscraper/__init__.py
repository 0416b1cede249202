from .bankconfig import (
    Config as Config,
)
from .bankconfig import (
    NavigationConfig as NavigationConfig,
)
from .bankconfig import (
    OutputConfig as OutputConfig,
)
from .bankconfig import (
    load_config as load_config,
)
from .bankerrors import (
    AmountParseError as AmountParseError,
)
from .bankerrors import (
    BankScraperError as BankScraperError,
)
from .bankerrors import (
    ConfigError as ConfigError,
)
from .bankerrors import (
    ExecutionError as ExecutionError,
)
from .bankerrors import (
    MalformedRowError as MalformedRowError,
)
from .bankerrors import (
    NoAlertPresentError as NoAlertPresentError,
)
from .bankresults import (
    ScrapeStats as ScrapeStats,
)
from .bankresults import (
    summarize as summarize,
)
from .bankresults import (
    to_dataframe as to_dataframe,
)
from .bankresults import (
    write_csv as write_csv,
)
from .bankresults import (
    write_json as write_json,
)
from .bankscraper import (
    PageDriver as PageDriver,
)
from .bankscraper import (
    PageScraper as PageScraper,
)
from .bankscraper import (
    RowExtractor as RowExtractor,
)
from .bankscraper import (
    TransactionRecord as TransactionRecord,
)
from .bankscraper import (
    dismiss_alert_if_needed as dismiss_alert_if_needed,
)
from .bankscraper import (
    extract_all as extract_all,
)
from .banksession import (
    PlaywrightDriver as PlaywrightDriver,
)
from .banksession import (
    open_page as open_page,
)
