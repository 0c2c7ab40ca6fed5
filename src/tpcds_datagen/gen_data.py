"""Generate TPC-DS data with dsdgen and register it as catalog tables.

To run this::

    gen-tpcds-data -d <dsdgenDir> -s <scaleFactor> -l <location> -f <format>
"""
from __future__ import annotations

import argparse
import sys
from typing import Any, Callable, Dict, List, Optional, Sequence

import yaml
from pydantic import ValidationError
from pyspark.sql import SparkSession

from tpcds_datagen.config import load_config, load_dotenv
from tpcds_datagen.logging_utils import apply_log_level, get_logger, timed
from tpcds_datagen.manifest import local_path, write_manifest
from tpcds_datagen.schemas import GenerationConfig
from tpcds_datagen.tables import ALL_TABLES_FILTER, TPCDSTables, all_tables, database_name

APP_NAME = "Gen-TPC-DS-data"

logger = get_logger("gen_tpcds_data")


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _bool(value: str) -> bool:
    v = value.strip().lower()
    if v in ("true", "yes", "1"):
        return True
    if v in ("false", "no", "0"):
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="Gen-TPC-DS-data",
        description="Generate TPC-DS data with dsdgen on Spark and register it as tables",
        argument_default=argparse.SUPPRESS,
    )
    parser.add_argument("-m", "--master", dest="master", type=str, help="the Spark master to use, default to local[*]")
    parser.add_argument("-d", "--dsdgenDir", dest="dsdgen_dir", type=str, required=True, help="location of dsdgen")
    parser.add_argument(
        "-s", "--scaleFactor", dest="scale_factor", type=str,
        help="scaleFactor defines the size of the dataset to generate (in GB)",
    )
    parser.add_argument("-l", "--location", dest="location", type=str, help="root directory of location to create data in")
    parser.add_argument("-f", "--format", dest="format", type=str, help="valid spark format, Parquet, ORC ...")
    parser.add_argument(
        "-i", "--useDoubleForDecimal", dest="use_double_for_decimal", type=_bool,
        help="true to replace DecimalType with DoubleType",
    )
    parser.add_argument(
        "-e", "--useStringForDate", dest="use_string_for_date", type=_bool,
        help="true to replace DateType with StringType",
    )
    parser.add_argument("-o", "--overwrite", dest="overwrite", type=_bool, help="overwrite the data that is already there")
    parser.add_argument(
        "-p", "--partitionTables", dest="partition_tables", type=_bool,
        help="create the partitioned fact tables",
    )
    parser.add_argument(
        "-c", "--clusterByPartitionColumns", dest="cluster_by_partition_columns", type=_bool,
        help="shuffle to get partitions coalesced into single files",
    )
    parser.add_argument(
        "-v", "--filterOutNullPartitionValues", dest="filter_out_null_partition_values", type=_bool,
        help="true to filter out the partition with NULL key value",
    )
    parser.add_argument(
        "-n", "--numPartitions", dest="num_partitions", type=int,
        help="how many dsdgen partitions to run - number of input tasks.",
    )
    parser.add_argument("--config", dest="config", type=str, help="YAML file with default option values")
    return parser


def parse_arguments(argv: Optional[Sequence[str]] = None) -> GenerationConfig:
    """Parse command-line flags into a GenerationConfig.

    Precedence: built-in defaults, then the --config YAML file, then flags.
    Exits with status 1 on any parse or validation failure.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    overrides: Dict[str, Any] = vars(args)
    config_path = overrides.pop("config", None)
    try:
        file_values = load_config(config_path)
        base = GenerationConfig.model_validate({**file_values, "dsdgen_dir": overrides["dsdgen_dir"]})
        config = base.with_overrides(**overrides)
    except (OSError, ValueError, ValidationError, yaml.YAMLError) as e:
        parser.error(str(e))
    return config


def build_session(master: str) -> SparkSession:
    return SparkSession.builder.appName(APP_NAME).master(master).getOrCreate()


def _require(config: GenerationConfig) -> None:
    missing: List[str] = [
        name for name in ("scale_factor", "location", "format") if getattr(config, name) is None
    ]
    if missing:
        raise ValueError(f"Missing required options for generation: {missing}")


def _record_run(spark: Any, config: GenerationConfig, db: str) -> None:
    out_dir = local_path(config.location)
    if out_dir is None:
        logger.info(f"No manifest written for non-local location {config.location}")
        return
    try:
        path = write_manifest(out_dir, db, config.model_dump(), getattr(spark, "version", None))
    except OSError as e:
        # tables are already registered; a missing manifest does not fail the run
        logger.warning(f"Could not write manifest under {out_dir}: {e}")
        return
    logger.info(f"Wrote {path}")


def run(
    config: GenerationConfig,
    spark: Any = None,
    tables_factory: Callable[..., Any] = TPCDSTables,
) -> str:
    """Generate the data, recreate the database and register the tables in it.

    Parameters:
    - config: generation options; scale_factor, location and format must be set.
    - spark: an existing session; one is built for config.master when omitted.
    - tables_factory: builds the TPCDSTables collaborator.

    Returns:
    - the name of the (re)created database.
    """
    _require(config)
    if spark is None:
        spark = build_session(config.master)

    tables = tables_factory(
        spark,
        config.dsdgen_dir,
        config.scale_factor,
        config.use_double_for_decimal,
        config.use_string_for_date,
    )

    logger.info(f"Generating {len(all_tables())} tables at sf={config.scale_factor} into {config.location}")
    with timed(logger, "genData") as step:
        tables.gen_data(
            location=config.location,
            format=config.format,
            overwrite=config.overwrite,
            partition_tables=config.partition_tables,
            cluster_by_partition_columns=config.cluster_by_partition_columns,
            filter_out_null_partition_values=config.filter_out_null_partition_values,
            table_filter=ALL_TABLES_FILTER,
            num_partitions=config.num_partitions,
        )
        step["tables"] = len(all_tables())
        step["location"] = config.location

    db = database_name(
        config.scale_factor,
        config.use_double_for_decimal,
        config.use_string_for_date,
        config.filter_out_null_partition_values,
    )
    logger.warning(f"Dropping database {db} if it exists")
    spark.sql(f"drop database if exists {db} cascade")
    spark.sql(f"create database {db}")

    with timed(logger, f"createExternalTables {db}") as step:
        tables.create_external_tables(
            config.location, config.format, db, overwrite=True, discover_partitions=True
        )
        step["format"] = config.format
    with timed(logger, f"analyzeTables {db}") as step:
        tables.analyze_tables(db, analyze_columns=True)
        step["columns"] = True

    _record_run(spark, config, db)
    return db


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv()
    apply_log_level(logger)
    config = parse_arguments(argv)
    db = run(config)
    logger.info(f"Done. Tables registered in database {db}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
