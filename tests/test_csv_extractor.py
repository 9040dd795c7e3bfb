"""Tests for text_chunking.csv_extractor."""

from text_chunking.csv_extractor import (
    extract_records,
    parse_likes,
    resolve_columns,
    split_fields,
    split_rows,
)

HEADER = "text,createdAt (TZ=America/Los_Angeles),link,numReactions"


class TestBasicExtraction:
    def test_extract_posts_from_valid_csv(self):
        csv = (
            f"{HEADER}\n"
            '"Great post about React!",2024-01-15,https://linkedin.com/posts/123,42\n'
            '"Another amazing post",2024-01-16,https://linkedin.com/posts/456,100'
        )
        posts = extract_records(csv)

        assert len(posts) == 2
        assert posts[0].text == "Great post about React!"
        assert posts[0].date == "2024-01-15"
        assert posts[0].url == "https://linkedin.com/posts/123"
        assert posts[0].likes == 42
        assert posts[1].text == "Another amazing post"
        assert posts[1].likes == 100

    def test_empty_csv(self):
        assert extract_records("") == []

    def test_header_only(self):
        assert extract_records(HEADER) == []

    def test_single_post(self):
        posts = extract_records(f'{HEADER}\n"Single post here",2024-01-15,https://linkedin.com/posts/123,5')

        assert len(posts) == 1
        assert posts[0].likes == 5

    def test_realistic_export(self, sample_csv):
        posts = extract_records(sample_csv)

        assert len(posts) == 3
        assert "🚀" in posts[0].text
        assert posts[0].date == "2024-01-15T10:30:00"
        assert posts[0].url == "https://www.linkedin.com/posts/activity-123"
        assert posts[1].text.startswith("Reflecting")
        assert "I learned, in order" in posts[1].text
        assert [p.likes for p in posts] == [42, 128, 256]


class TestHeaderDetection:
    def test_case_insensitive(self):
        csv = (
            "TEXT,CreatedAt (TZ=America/Los_Angeles),LINK,NumReactions\n"
            '"Post content",2024-01-15,https://linkedin.com/posts/123,10'
        )
        posts = extract_records(csv)

        assert len(posts) == 1
        assert posts[0].date == "2024-01-15"
        assert posts[0].url == "https://linkedin.com/posts/123"
        assert posts[0].likes == 10

    def test_alternative_names(self):
        csv = 'post text,created at,url,reactions\n"Alternative names work",2024-01-15,https://linkedin.com/posts/123,25'
        posts = extract_records(csv)

        assert len(posts) == 1
        assert posts[0].text == "Alternative names work"
        assert posts[0].likes == 25

    def test_missing_columns_returns_empty(self):
        csv = 'wrong,column,names,here\n"Post content",2024-01-15,https://linkedin.com/posts/123,10'

        assert extract_records(csv) == []

    def test_byte_order_mark_ignored(self):
        csv = f'\ufeff{HEADER}\n"Post content",2024-01-15,https://linkedin.com/posts/123,10'

        assert len(extract_records(csv)) == 1

    def test_column_order_does_not_matter(self):
        columns = resolve_columns(["numReactions", "link", "createdAt", "text"])

        assert columns == {"text": 3, "date": 2, "url": 1, "likes": 0}

    def test_substring_fallback(self):
        columns = resolve_columns(["Post Content Body", "Date Posted", "Share URL", "Like Count"])

        assert columns == {"text": 0, "date": 1, "url": 2, "likes": 3}

    def test_unresolvable_returns_none(self):
        assert resolve_columns(["text", "date", "url"]) is None


class TestQuotedFields:
    def test_commas_inside_quotes(self):
        posts = extract_records(f'{HEADER}\n"Post with, commas inside",2024-01-15,https://linkedin.com/posts/123,10')

        assert posts[0].text == "Post with, commas inside"

    def test_escaped_quotes(self):
        posts = extract_records(f'{HEADER}\n"Post with ""quotes"" inside",2024-01-15,https://linkedin.com/posts/123,10')

        assert posts[0].text == 'Post with "quotes" inside'

    def test_newlines_inside_quotes(self):
        csv = f'{HEADER}\n"Post with\nmultiple lines",2024-01-15,https://linkedin.com/posts/123,10'
        posts = extract_records(csv)

        assert len(posts) == 1
        assert posts[0].text == "Post with\nmultiple lines"

    def test_quoted_whitespace_preserved(self):
        csv = f'{HEADER}\n"  Post with spaces  ",  2024-01-15  ,  https://linkedin.com/posts/123  ,  50  '
        posts = extract_records(csv)

        assert len(posts) == 1
        assert posts[0].text == "  Post with spaces  "
        assert posts[0].date == "2024-01-15"
        assert posts[0].url == "https://linkedin.com/posts/123"
        assert posts[0].likes == 50

    def test_mid_field_quote_keeps_surrounding_text(self):
        fields = split_fields('He said "hi" loudly,2024,u,1')

        assert fields == ["He said hi loudly", "2024", "u", "1"]

    def test_mid_field_quote_protects_commas(self):
        fields = split_fields('Tags "a, b" end ,2024')

        assert fields == ["Tags a, b end", "2024"]

    def test_whitespace_before_opening_quote_dropped(self):
        assert split_fields('  "quoted" ,next') == ["quoted", "next"]


class TestDataValidation:
    def test_rows_without_text_or_url_skipped(self):
        csv = (
            f"{HEADER}\n"
            ",2024-01-15,,10\n"
            '"Valid post",2024-01-16,https://linkedin.com/posts/456,20'
        )
        posts = extract_records(csv)

        assert [p.text for p in posts] == ["Valid post"]

    def test_row_with_url_only_kept(self):
        posts = extract_records(f"{HEADER}\n,2024-01-15,https://linkedin.com/posts/9,3")

        assert len(posts) == 1
        assert posts[0].text == ""
        assert posts[0].source == "https://linkedin.com/posts/9"

    def test_invalid_likes_default_to_zero(self):
        csv = (
            f"{HEADER}\n"
            '"Post with invalid likes",2024-01-15,https://linkedin.com/posts/123,not-a-number\n'
            '"Post with empty likes",2024-01-16,https://linkedin.com/posts/456,'
        )
        posts = extract_records(csv)

        assert len(posts) == 2
        assert posts[0].likes == 0
        assert posts[1].likes == 0

    def test_numeric_likes(self):
        csv = (
            f"{HEADER}\n"
            '"Post 1",2024-01-15,https://linkedin.com/posts/123,0\n'
            '"Post 2",2024-01-16,https://linkedin.com/posts/456,42\n'
            '"Post 3",2024-01-17,https://linkedin.com/posts/789,1000'
        )

        assert [p.likes for p in extract_records(csv)] == [0, 42, 1000]

    def test_short_row_fills_missing_fields(self):
        posts = extract_records(f'{HEADER}\n"Only text here"')

        assert len(posts) == 1
        assert posts[0].url == ""
        assert posts[0].likes == 0
        assert posts[0].source == "linkedin_post"

    def test_parse_likes(self):
        assert parse_likes("42") == 42
        assert parse_likes(" 7 ") == 7
        assert parse_likes("3.0") == 3
        assert parse_likes("") == 0
        assert parse_likes("lots") == 0


class TestRowSplitting:
    def test_empty_rows_ignored(self):
        csv = f'{HEADER}\n\n"Valid post",2024-01-15,https://linkedin.com/posts/123,10\n'
        posts = extract_records(csv)

        assert [p.text for p in posts] == ["Valid post"]

    def test_windows_line_endings(self):
        csv = f'{HEADER}\r\n"Post content",2024-01-15,https://linkedin.com/posts/123,10\r\n'
        posts = extract_records(csv)

        assert len(posts) == 1
        assert posts[0].text == "Post content"

    def test_old_mac_line_endings(self):
        assert split_rows("a,b\rc,d") == ["a,b", "c,d"]

    def test_split_rows_keeps_quotes(self):
        rows = split_rows('h1,h2\n"multi\nline","say ""hi"""\n')

        assert rows == ["h1,h2", '"multi\nline","say ""hi"""']

    def test_split_fields(self):
        assert split_fields('"a, b", c ,"say ""hi""",') == ["a, b", "c", 'say "hi"', ""]

    def test_special_characters(self):
        posts = extract_records(f'{HEADER}\n"Post with emoji 🚀 and symbols: @#$%",2024-01-15,https://linkedin.com/posts/123,10')

        assert posts[0].text == "Post with emoji 🚀 and symbols: @#$%"

    def test_very_long_text(self):
        long_text = "A" * 10000
        posts = extract_records(f'{HEADER}\n"{long_text}",2024-01-15,https://linkedin.com/posts/123,10')

        assert posts[0].text == long_text

    def test_mixed_valid_and_invalid_rows(self):
        csv = (
            f"{HEADER}\n"
            '"Valid post 1",2024-01-15,https://linkedin.com/posts/1,10\n'
            ",2024-01-16,,20\n"
            '"Valid post 2",2024-01-17,https://linkedin.com/posts/2,30'
        )

        assert [p.text for p in extract_records(csv)] == ["Valid post 1", "Valid post 2"]
