"""
Tests for delimited-text ingestion.
"""

import io

from mixviz.data_loader import get_sample_data, parse_uploaded_file


def _upload(text: str, encoding: str = 'utf-8') -> io.BytesIO:
    return io.BytesIO(text.encode(encoding))


class TestParseUploadedFile:

    def test_comma_with_header(self):
        df, fields, error = parse_uploaded_file(_upload("A,B,C,P\n1,2,3,0.5\n4,5,6,0.7\n"))

        assert error is None
        assert fields == ['A', 'B', 'C', 'P']
        assert len(df) == 2
        assert df['P'].tolist() == [0.5, 0.7]

    def test_tab_delimited(self):
        df, fields, error = parse_uploaded_file(_upload("A\tB\tP\n1\t2\t3\n"))

        assert error is None
        assert fields == ['A', 'B', 'P']

    def test_whitespace_delimited(self):
        df, fields, error = parse_uploaded_file(_upload("A B P\n1 2 3\n4  5 6\n"))

        assert error is None
        assert fields == ['A', 'B', 'P']
        assert df['B'].tolist() == [2, 5]

    def test_blank_lines_skipped(self):
        df, fields, error = parse_uploaded_file(_upload("A,B,P\n1,2,3\n\n,,\n4,5,6\n\n"))

        assert error is None
        assert len(df) == 2
        assert df['A'].tolist() == [1, 4]

    def test_text_cells_kept(self):
        df, fields, error = parse_uploaded_file(_upload("A,B,P\n1,x,3\n2,5,high\n"))

        assert df.loc[0, 'B'] == 'x'
        assert df.loc[1, 'P'] == 'high'

    def test_header_whitespace_stripped(self):
        _, fields, _ = parse_uploaded_file(_upload(" A , B ,P\n1,2,3\n"))

        assert fields == ['A', 'B', 'P']

    def test_bom_and_rewind(self):
        upload = io.BytesIO('\ufeffA,B,P\n1,2,3\n'.encode('utf-8'))

        _, fields, _ = parse_uploaded_file(upload)

        assert fields == ['A', 'B', 'P']
        assert upload.tell() == 0

    def test_shift_jis_fallback(self):
        _, fields, error = parse_uploaded_file(_upload("組成A,組成B,P\n1,2,3\n", encoding='shift-jis'))

        assert error is None
        assert fields == ['組成A', '組成B', 'P']

    def test_empty_file_reports_error(self):
        df, fields, error = parse_uploaded_file(_upload(""))

        assert df is None
        assert fields is None
        assert error


def test_sample_data_supports_every_mode():
    data = get_sample_data()

    assert len(data) > 10
    assert 'sigma' in data.columns
    assert len(data.columns) - 1 >= 5
