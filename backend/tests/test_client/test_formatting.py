from pdfi.client.formatting import format_file_size, rejection_reason, summary_filename

TEN_MB = 10 * 1024 * 1024


class TestFormatFileSize:
    def test_zero(self):
        assert format_file_size(0) == "0 Bytes"

    def test_bytes(self):
        assert format_file_size(512) == "512 Bytes"

    def test_trailing_zeros_are_dropped(self):
        assert format_file_size(1024) == "1 KB"
        assert format_file_size(1536) == "1.5 KB"

    def test_megabytes_and_gigabytes(self):
        assert format_file_size(TEN_MB) == "10 MB"
        assert format_file_size(3 * 1024 ** 3) == "3 GB"

    def test_largest_unit_is_gigabytes(self):
        assert format_file_size(2 * 1024 ** 4) == "2048 GB"


class TestSummaryFilename:
    def test_uses_text_before_first_dot(self):
        assert summary_filename("report.final.pdf") == "report_summary.txt"

    def test_name_without_extension(self):
        assert summary_filename("scan") == "scan_summary.txt"


class TestRejectionReason:
    def test_pdf_and_common_images_are_accepted(self):
        assert rejection_reason("a.pdf", "application/pdf", 100, TEN_MB) is None
        assert rejection_reason("b.JPG", "image/jpeg", 100, TEN_MB) is None
        assert rejection_reason("c.webp", "image/webp", 100, TEN_MB) is None

    def test_other_types_are_rejected(self):
        reason = rejection_reason("notes.txt", "text/plain", 100, TEN_MB)
        assert reason is not None
        assert "unsupported file type" in reason

    def test_unlisted_image_extension_is_rejected(self):
        assert rejection_reason("vector.svg", "image/svg+xml", 100, TEN_MB) is not None

    def test_oversized_file_is_rejected(self):
        reason = rejection_reason("big.pdf", "application/pdf", TEN_MB + 1, TEN_MB)
        assert reason is not None
        assert "10 MB" in reason
