from __future__ import annotations

from typing import Any, List

from py4j.java_gateway import JavaPackage

NON_PARTITIONED_TABLES = [
    "call_center",
    "catalog_page",
    "customer",
    "customer_address",
    "customer_demographics",
    "date_dim",
    "household_demographics",
    "income_band",
    "item",
    "promotion",
    "reason",
    "ship_mode",
    "store",
    "time_dim",
    "warehouse",
    "web_page",
    "web_site",
]
PARTITIONED_TABLES = [
    "inventory",
    "web_returns",
    "catalog_returns",
    "store_returns",
    "web_sales",
    "catalog_sales",
    "store_sales",
]

# An empty filter selects every table.
ALL_TABLES_FILTER = ""

JVM_TABLES_CLASS = "com.databricks.spark.sql.perf.tpcds.TPCDSTables"


def all_tables() -> List[str]:
    return NON_PARTITIONED_TABLES + PARTITIONED_TABLES


def database_name(
    scale_factor: str,
    use_double_for_decimal: bool,
    use_string_for_date: bool,
    filter_out_null_partition_values: bool,
) -> str:
    """Catalog database name for a generated dataset.

    e.g. ("1", False, True, True) -> "tpcds_sf1_nodecimal_withdate_nonulls"
    """
    decimal = "with" if use_double_for_decimal else "no"
    date = "with" if use_string_for_date else "no"
    nulls = "no" if filter_out_null_partition_values else "with"
    return f"tpcds_sf{scale_factor}_{decimal}decimal_{date}date_{nulls}nulls"


def _jvm_class(jvm: Any, qualified_name: str) -> Any:
    obj = jvm
    for part in qualified_name.split("."):
        obj = getattr(obj, part)
    if isinstance(obj, JavaPackage):
        # py4j resolves unknown names to packages instead of failing
        raise RuntimeError(
            f"{qualified_name} not found on the Spark classpath. "
            "Add the spark-sql-perf jar, e.g. PYSPARK_SUBMIT_ARGS='--jars spark-sql-perf.jar pyspark-shell'."
        )
    return obj


class TPCDSTables:
    """Python handle on the spark-sql-perf TPCDSTables collaborator.

    Schema generation, dsdgen invocation, partitioning, external table
    registration and statistics all run in the JVM; this class only maps
    keyword arguments onto the positional py4j calls.
    """

    def __init__(
        self,
        spark: Any,
        dsdgen_dir: str,
        scale_factor: str,
        use_double_for_decimal: bool = False,
        use_string_for_date: bool = False,
    ) -> None:
        cls = _jvm_class(spark.sparkContext._jvm, JVM_TABLES_CLASS)
        self._jtables = cls(
            spark._jsparkSession.sqlContext(),
            dsdgen_dir,
            scale_factor,
            use_double_for_decimal,
            use_string_for_date,
        )

    def gen_data(
        self,
        location: str,
        format: str,
        overwrite: bool,
        partition_tables: bool,
        cluster_by_partition_columns: bool,
        filter_out_null_partition_values: bool,
        table_filter: str = ALL_TABLES_FILTER,
        num_partitions: int = 100,
    ) -> None:
        self._jtables.genData(
            location,
            format,
            overwrite,
            partition_tables,
            cluster_by_partition_columns,
            filter_out_null_partition_values,
            table_filter,
            num_partitions,
        )

    def create_external_tables(
        self,
        location: str,
        format: str,
        database_name: str,
        overwrite: bool,
        discover_partitions: bool = False,
        table_filter: str = ALL_TABLES_FILTER,
    ) -> None:
        self._jtables.createExternalTables(
            location, format, database_name, overwrite, discover_partitions, table_filter
        )

    def analyze_tables(
        self,
        database_name: str,
        analyze_columns: bool = False,
        table_filter: str = ALL_TABLES_FILTER,
    ) -> None:
        self._jtables.analyzeTables(database_name, analyze_columns, table_filter)
