from __future__ import annotations

import pytest

from tpcds_datagen.gen_data import parse_arguments


REQUIRED = ["-d", "/opt/tpcds-kit/tools"]


def test_defaults_when_only_dsdgen_dir_given():
    cfg = parse_arguments(REQUIRED)
    assert cfg.dsdgen_dir == "/opt/tpcds-kit/tools"
    assert cfg.master == "local[*]"
    assert cfg.scale_factor is None
    assert cfg.location is None
    assert cfg.format is None
    assert cfg.use_double_for_decimal is False
    assert cfg.use_string_for_date is False
    assert cfg.overwrite is False
    assert cfg.partition_tables is True
    assert cfg.cluster_by_partition_columns is True
    assert cfg.filter_out_null_partition_values is True
    assert cfg.num_partitions == 10000


def test_all_flags_short_form():
    cfg = parse_arguments(
        [
            "-m", "spark://host:7077",
            "-d", "/usr/local/bin",
            "-s", "100",
            "-l", "/data/tpcds",
            "-f", "orc",
            "-i", "true",
            "-e", "true",
            "-o", "true",
            "-p", "false",
            "-c", "false",
            "-v", "false",
            "-n", "500",
        ]
    )
    assert cfg.master == "spark://host:7077"
    assert cfg.dsdgen_dir == "/usr/local/bin"
    assert cfg.scale_factor == "100"
    assert cfg.location == "/data/tpcds"
    assert cfg.format == "orc"
    assert cfg.use_double_for_decimal is True
    assert cfg.use_string_for_date is True
    assert cfg.overwrite is True
    assert cfg.partition_tables is False
    assert cfg.cluster_by_partition_columns is False
    assert cfg.filter_out_null_partition_values is False
    assert cfg.num_partitions == 500


def test_long_form_flags():
    cfg = parse_arguments(
        [
            "--dsdgenDir", "/usr/local/bin",
            "--scaleFactor", "1",
            "--location", "/data",
            "--format", "parquet",
            "--useStringForDate", "yes",
            "--numPartitions", "8",
        ]
    )
    assert cfg.scale_factor == "1"
    assert cfg.format == "parquet"
    assert cfg.use_string_for_date is True
    assert cfg.use_double_for_decimal is False
    assert cfg.num_partitions == 8


def test_boolean_values_are_case_insensitive():
    assert parse_arguments(REQUIRED + ["-o", "TRUE"]).overwrite is True
    assert parse_arguments(REQUIRED + ["-p", "0"]).partition_tables is False
    assert parse_arguments(REQUIRED + ["-c", "No"]).cluster_by_partition_columns is False


def test_missing_dsdgen_dir_exits_1(capsys):
    with pytest.raises(SystemExit) as exc:
        parse_arguments(["-s", "1", "-l", "/data", "-f", "parquet"])
    assert exc.value.code == 1
    assert "dsdgenDir" in capsys.readouterr().err


@pytest.mark.parametrize(
    "extra",
    [
        ["--unknown", "x"],
        ["-o", "maybe"],
        ["-n", "many"],
        ["-n", "0"],
        ["-s", "ten"],
        ["-d", ""],
        ["-n", "3000000000"],
        ["-l", ""],
        ["-f", ""],
    ],
)
def test_bad_arguments_exit_1(extra):
    with pytest.raises(SystemExit) as exc:
        parse_arguments(REQUIRED + extra)
    assert exc.value.code == 1


def test_help_exits_0(capsys):
    with pytest.raises(SystemExit) as exc:
        parse_arguments(["--help"])
    assert exc.value.code == 0
    assert "--numPartitions" in capsys.readouterr().out


def test_yaml_config_supplies_defaults_and_flags_win(tmp_path):
    path = tmp_path / "gen.yaml"
    path.write_text(
        "scale_factor: 10\n"
        "location: /data/from_yaml\n"
        "format: parquet\n"
        "num_partitions: 40\n"
        "overwrite: true\n"
    )
    cfg = parse_arguments(REQUIRED + ["--config", str(path), "-n", "7"])
    assert cfg.scale_factor == "10"
    assert cfg.location == "/data/from_yaml"
    assert cfg.overwrite is True
    assert cfg.num_partitions == 7
    assert cfg.dsdgen_dir == "/opt/tpcds-kit/tools"


@pytest.mark.parametrize(
    "content",
    [
        "no_such_option: 1\n",
        "- a\n- b\n",
        "location: [unclosed\n",
    ],
)
def test_invalid_yaml_config_exits_1(tmp_path, content):
    path = tmp_path / "gen.yaml"
    path.write_text(content)
    with pytest.raises(SystemExit) as exc:
        parse_arguments(REQUIRED + ["--config", str(path)])
    assert exc.value.code == 1


def test_missing_yaml_config_exits_1(tmp_path):
    with pytest.raises(SystemExit) as exc:
        parse_arguments(REQUIRED + ["--config", str(tmp_path / "absent.yaml")])
    assert exc.value.code == 1


def test_num_partitions_upper_bound_is_java_int_max():
    assert parse_arguments(REQUIRED + ["-n", str(2**31 - 1)]).num_partitions == 2**31 - 1
