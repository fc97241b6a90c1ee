"""Tests for the handle / stream-reader state machine."""

import time

import pytest

from vcfstream import (
    EndOfData,
    FileFormat,
    Pass,
    VcfFormatError,
    VcfIoError,
    header_of,
    next_record,
    open_handle,
    take_records,
)
from vcfstream.io import StreamState, VcfReader

from .conftest import DATA_LINES, HEADER_LINES


def drain_one_by_one(handle):
    out = []
    while True:
        try:
            out.append(next_record(handle))
        except EndOfData:
            return out


class TestOpenHandle:
    def test_header_of(self, small_vcf):
        with open_handle(small_vcf) as handle:
            header = header_of(handle)
            assert header is handle.header
            assert header.fileformat == FileFormat(4, 1)
            assert header.sample_names == ("S1", "S2")
            assert handle.state is StreamState.OPEN

    def test_missing_file(self, tmp_path):
        with pytest.raises(VcfIoError):
            open_handle(tmp_path / "missing.vcf")

    def test_bad_header_fails_open(self, write_vcf):
        path = write_vcf(["##fileformat=VCFv4.1", "chr1\t1\t.\tA\tT\t.\t.\t."])
        with pytest.raises(VcfFormatError, match="missing column header line"):
            open_handle(path)

    def test_close(self, small_vcf):
        handle = open_handle(small_vcf)
        handle.close()
        assert handle.closed
        with pytest.raises(ValueError):
            next_record(handle)


class TestNextRecord:
    def test_reads_in_order_then_end_of_data_twice(self, small_vcf):
        with open_handle(small_vcf) as handle:
            positions = [next_record(handle).position for _ in DATA_LINES]
            assert positions == [100, 200, 300]
            with pytest.raises(EndOfData):
                next_record(handle)
            assert handle.state is StreamState.EXHAUSTED
            with pytest.raises(EndOfData):
                next_record(handle)

    def test_first_record_matches_line(self, small_vcf):
        with open_handle(small_vcf) as handle:
            rec = next_record(handle)
        assert rec.chromosome == "chr1"
        assert rec.filters == Pass()
        assert dict(rec.genotypes) == {"S1": "0/1:10", "S2": "1/1:8"}
        assert rec.format == ("GT", "DP")

    def test_header_only_file(self, write_vcf):
        path = write_vcf(HEADER_LINES)
        with open_handle(path) as handle:
            with pytest.raises(EndOfData):
                next_record(handle)
            assert take_records(handle, 5) == []

    def test_blank_lines_are_skipped(self, write_vcf):
        path = write_vcf(HEADER_LINES + [DATA_LINES[0], "", DATA_LINES[1], "", ""])
        with open_handle(path) as handle:
            assert len(drain_one_by_one(handle)) == 2

    def test_no_trailing_newline(self, write_vcf):
        path = write_vcf(HEADER_LINES + DATA_LINES, trailing_newline=False)
        with open_handle(path) as handle:
            assert [r.position for r in drain_one_by_one(handle)] == [100, 200, 300]

    def test_format_error_consumes_only_offending_line(self, write_vcf):
        bad = "chr1\tabc\t.\tA\tT\t.\t.\t.\tGT\t0/1\t0/1"
        path = write_vcf(HEADER_LINES + [DATA_LINES[0], bad, DATA_LINES[2]])
        with open_handle(path) as handle:
            assert next_record(handle).position == 100
            with pytest.raises(VcfFormatError) as excinfo:
                next_record(handle)
            assert excinfo.value.line == bad
            assert excinfo.value.line_number == len(HEADER_LINES) + 2
            assert next_record(handle).position == 300
            with pytest.raises(EndOfData):
                next_record(handle)

    def test_invalid_byte_loses_only_its_line(self, tmp_path):
        lines = [line.encode("utf-8") for line in HEADER_LINES]
        for i in range(1, 400):
            info = b"DP=\xff" if i == 200 else b"DP=%d" % i
            lines.append(b"chr1\t%d\t.\tA\tT\t.\tPASS\t%s\tGT\t0/1\t0/0" % (i, info))
        path = tmp_path / "bad_byte.vcf"
        path.write_bytes(b"\n".join(lines) + b"\n")

        positions, errors = [], []
        with open_handle(path) as handle:
            while True:
                try:
                    positions.append(next_record(handle).position)
                except VcfFormatError as exc:
                    errors.append(exc)
                except EndOfData:
                    break
        assert len(errors) == 1
        assert errors[0].line_number == len(HEADER_LINES) + 200
        assert positions == [i for i in range(1, 400) if i != 200]

    def test_iteration(self, small_vcf):
        with open_handle(small_vcf) as handle:
            assert [r.position for r in handle] == [100, 200, 300]
            assert list(handle) == []


class TestTakeRecords:
    def test_take_all(self, small_vcf):
        with open_handle(small_vcf) as handle:
            records = take_records(handle, 10)
        with open_handle(small_vcf) as handle:
            assert records == drain_one_by_one(handle)
        assert len(records) == 3

    def test_take_zero_consumes_nothing(self, small_vcf):
        with open_handle(small_vcf) as handle:
            line_number = handle.stream.line_number
            assert take_records(handle, 0) == []
            assert handle.stream.line_number == line_number
            assert len(take_records(handle, 100)) == 3

    def test_take_negative(self, small_vcf):
        with open_handle(small_vcf) as handle:
            with pytest.raises(ValueError):
                take_records(handle, -1)

    @pytest.mark.parametrize("k", [1, 2, 3, 7])
    def test_batches_concatenate_to_sequential_read(self, small_vcf, k):
        with open_handle(small_vcf) as handle:
            expected = drain_one_by_one(handle)
        batched = []
        with open_handle(small_vcf) as handle:
            while True:
                batch = handle.take_records(k)
                assert len(batch) <= k
                if not batch:
                    break
                batched.extend(batch)
        assert batched == expected

    def test_format_error_fails_whole_batch(self, write_vcf):
        bad = "chr1\t1\t.\tA\tT\tbad\t.\t.\tGT\t0/1\t0/1"
        path = write_vcf(HEADER_LINES + [DATA_LINES[0], bad, DATA_LINES[2]])
        with open_handle(path) as handle:
            with pytest.raises(VcfFormatError):
                take_records(handle, 10)
            assert [r.position for r in take_records(handle, 10)] == [300]

    def test_reopen_is_deterministic(self, batched_vcf):
        with open_handle(batched_vcf) as first, open_handle(batched_vcf) as second:
            a = take_records(first, 5000)
            b = drain_one_by_one(second)
        assert a == b
        assert len(a) == 2588


class TestLargeFile:
    def test_reads_correct_amount_of_records(self, batched_vcf):
        with open_handle(batched_vcf) as handle:
            assert handle.header.fileformat == FileFormat(4, 1)
            start = time.perf_counter()
            for _ in range(2588):
                next_record(handle)
            with pytest.raises(EndOfData):
                next_record(handle)
            elapsed = time.perf_counter() - start
        assert elapsed < 1.0

    def test_batched_mode(self, batched_vcf):
        records = []
        with open_handle(batched_vcf) as handle:
            while True:
                batch = take_records(handle, 1000)
                if not batch:
                    break
                records.extend(batch)
        assert len(records) == 2588
        assert [r.position for r in records] == list(range(1, 2589))
        assert records[6].quality_score is None
        assert records[10].filters.names == ("q10",)


class TestVcfReader:
    def test_parse_respects_max_records(self, batched_vcf):
        reader = VcfReader(batched_vcf, max_records=25)
        assert len(list(reader.parse())) == 25
        assert reader.samples == ["NA00001"]

    def test_parse_twice(self, small_vcf):
        reader = VcfReader(small_vcf)
        assert list(reader.parse()) == list(reader.parse())

    def test_batches(self, batched_vcf):
        sizes = [len(b) for b in VcfReader(batched_vcf).batches(1000)]
        assert sizes == [1000, 1000, 588]
        sizes = [len(b) for b in VcfReader(batched_vcf, max_records=1500).batches(1000)]
        assert sizes == [1000, 500]

    def test_samples_before_parse(self, small_vcf):
        assert VcfReader(small_vcf).samples == ["S1", "S2"]

    def test_zero_max_records_reads_nothing(self, small_vcf):
        reader = VcfReader(small_vcf, max_records=0)
        assert list(reader.parse()) == []
        assert list(reader.batches(10)) == []
        assert reader.samples == ["S1", "S2"]
