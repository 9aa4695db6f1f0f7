"""End-to-end tests for stripping binding layouts."""

import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from bindstrip import BindingLayoutError, LayoutStripper, MarkupSyntaxError, strip, strip_text
from bindstrip.cli import main


def normalize(text):
    return " ".join(text.split())


USER_LAYOUT = """<?xml version="1.0" encoding="utf-8"?>
<layout xmlns:android="http://schemas.android.com/apk/res/android">
    <data>
        <variable name="user" type="com.example.User"/>
    </data>
    <TextView android:text="@{user.name, default=&quot;Bob&quot;}"/>
</layout>"""

LIST_LAYOUT = """<layout>
    <LinearLayout>
        <TextView android:text="@{user.name}" android:hint="@{user.hint}"/>
        <include layout="@layout/header"/>
        <View android:alpha="@{x}"/>
    </LinearLayout>
</layout>"""

PLAIN_LAYOUT = """<layout>
    <FrameLayout android:id="@+id/root">
        <TextView android:text="hello"/>
    </FrameLayout>
</layout>"""


class TestStripText(unittest.TestCase):
    def test_metadata_and_wrapper_are_removed(self):
        output = strip_text(USER_LAYOUT, line_separator="\n")
        assert "layout" not in output.replace("@layout/", "")
        assert "<data" not in output
        assert "</data>" not in output
        assert "variable" not in output

    def test_literal_default_and_hoisted_root_attributes(self):
        output = strip_text(USER_LAYOUT, line_separator="\n")
        assert normalize(output) == (
            '<?xml version="1.0" encoding="utf-8"?> '
            '<TextView android:text="Bob" android:tag="binding_0" '
            'xmlns:android="http://schemas.android.com/apk/res/android"/>'
        )

    def test_line_count_is_preserved(self):
        output = strip_text(USER_LAYOUT, line_separator="\n")
        assert len(output.split("\n")) == len(USER_LAYOUT.split("\n"))
        # The content root stays on its original line.
        assert "<TextView" in output.split("\n")[5]

    def test_tags_and_includes(self):
        output = strip_text(LIST_LAYOUT, line_separator="\n")
        assert normalize(output) == (
            '<LinearLayout android:tag="binding_0"> '
            '<TextView android:tag="binding_1" /> '
            '<include layout="@layout/header" android:tag="binding_include"/> '
            '<View android:tag="binding_2"/> '
            "</LinearLayout>"
        )

    def test_single_tag_per_element(self):
        output = strip_text(LIST_LAYOUT, line_separator="\n")
        text_view = output.split("\n")[2]
        assert text_view.count("android:tag=") == 1
        assert "@{" not in output

    def test_override_tag_prefix(self):
        output = strip_text(LIST_LAYOUT, "main", line_separator="\n")
        assert '<LinearLayout android:tag="main_0">' in normalize(output)
        assert 'android:tag="binding_1"' in output
        assert 'android:tag="binding_2"' in output

    def test_merge_root_with_prefix(self):
        text = '<layout>\n    <merge>\n        <TextView android:text="@{a}"/>\n        <View/>\n    </merge>\n</layout>'
        output = strip_text(text, "main", line_separator="\n")
        assert normalize(output) == (
            '<merge> <TextView android:tag="main_0"/> <View android:tag="main_1"/> </merge>'
        )

    def test_plain_layout_round_trip(self):
        output = strip_text(PLAIN_LAYOUT, line_separator="\n")
        assert normalize(output) == (
            '<FrameLayout android:id="@+id/root"> <TextView android:text="hello"/> </FrameLayout>'
        )
        assert strip_text(output) is None

    def test_not_a_binding_layout(self):
        assert strip_text("<LinearLayout/>") is None
        assert strip_text("") is None

    def test_include_with_expressions_keeps_later_numbering(self):
        text = (
            "<layout>\n"
            "    <LinearLayout>\n"
            '        <include layout="@layout/x" app:user="@{user}"/>\n'
            '        <TextView android:text="@{a}"/>\n'
            "    </LinearLayout>\n"
            "</layout>"
        )
        lines = strip_text(text, line_separator="\n").split("\n")
        assert normalize(lines[1]) == '<LinearLayout android:tag="binding_0">'
        assert normalize(lines[2]) == '<include layout="@layout/x" android:tag="binding_include"/>'
        assert normalize(lines[3]) == '<TextView android:tag="binding_1"/>'

    def test_literal_that_does_not_fit_is_inserted_once(self):
        text = (
            '<layout xmlns:app="http://example.com/app">\n'
            "    <TextView a=\"@{x,default='>>>>>>>>'}\" android:text=\"@{u}\"/>\n"
            "</layout>"
        )
        output = strip_text(text, line_separator="\n")
        literal = 'a="' + "&gt;" * 8 + '"'
        assert output.count(literal) == 1
        assert output.count("android:tag=") == 1
        assert "@{" not in output
        assert normalize(output) == (
            '<TextView android:tag="binding_0" ' + literal + ' xmlns:app="http://example.com/app"/>'
        )

    def test_wrapper_on_one_line_with_content(self):
        output = strip_text('<layout><View android:alpha="@{x}"/></layout>', line_separator="\n")
        assert normalize(output) == '<View android:tag="binding_0"/>'

    def test_crlf_input(self):
        text = LIST_LAYOUT.replace("\n", "\r\n")
        output = strip_text(text, line_separator="\r\n")
        assert output.count("\r\n") == LIST_LAYOUT.count("\n")
        assert normalize(output) == normalize(strip_text(LIST_LAYOUT, line_separator="\n"))

    def test_byte_order_mark_is_dropped(self):
        output = strip_text("\ufeff" + PLAIN_LAYOUT, line_separator="\n")
        assert normalize(output).startswith("<FrameLayout")

    def test_default_line_separator_is_native(self):
        output = strip_text(PLAIN_LAYOUT)
        assert output.count(os.linesep) == PLAIN_LAYOUT.count("\n")

    def test_structural_errors(self):
        with self.assertRaises(BindingLayoutError):
            strip_text("<layout><data/><data/><View/></layout>")
        with self.assertRaises(BindingLayoutError):
            strip_text("<layout><View/><View/></layout>")

    def test_syntax_errors_name_the_source(self):
        with self.assertRaises(MarkupSyntaxError) as ctx:
            strip_text("<layout><View></layout>", source="broken.xml")
        assert ctx.exception.source == "broken.xml"
        assert "broken.xml" in str(ctx.exception)

    def test_debug_trace(self):
        out = io.StringIO()
        with redirect_stdout(out):
            LayoutStripper(LIST_LAYOUT, debug=True, source="list.xml").run()
        trace = out.getvalue()
        assert "stripping list.xml" in trace
        assert "TagAnnotationWalker" in trace
        assert "DeferredInsertionScheduler" in trace

    def test_no_trace_by_default(self):
        out = io.StringIO()
        with redirect_stdout(out):
            strip_text(LIST_LAYOUT)
        assert out.getvalue() == ""


class TestStripFile(unittest.TestCase):
    def test_strip_reads_utf8(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "activity_main.xml"
            path.write_text(PLAIN_LAYOUT.replace("hello", "héllo"), encoding="utf-8")
            output = strip(path, line_separator="\n")
        assert 'android:text="héllo"' in output

    def test_strip_reports_file_in_errors(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bad.xml"
            path.write_text("<layout><View/><View/></layout>", encoding="utf-8")
            with self.assertRaises(BindingLayoutError) as ctx:
                strip(path)
        assert ctx.exception.source == str(path)


class TestCommandLine(unittest.TestCase):
    def run_main(self, argv):
        out = io.StringIO()
        err = io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            status = main(argv)
        return status, out.getvalue(), err.getvalue()

    def test_single_file_to_stdout(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "list.xml"
            path.write_text(LIST_LAYOUT, encoding="utf-8")
            status, out, err = self.run_main([str(path), "--line-separator", "lf"])
        assert status == 0
        assert err == ""
        assert 'android:tag="binding_include"' in out

    def test_output_directory_and_skipped_files(self):
        with tempfile.TemporaryDirectory() as tmp:
            tmp = Path(tmp)
            binding = tmp / "list.xml"
            binding.write_text(LIST_LAYOUT, encoding="utf-8")
            plain = tmp / "plain.xml"
            plain.write_text("<FrameLayout/>", encoding="utf-8")
            out_dir = tmp / "out"
            status, _, err = self.run_main([str(binding), str(plain), "-o", str(out_dir), "--tag", "main"])
            assert status == 0
            assert "skipped" in err
            assert (out_dir / "plain.xml").read_text(encoding="utf-8") == "<FrameLayout/>"
            assert 'android:tag="main_0"' in (out_dir / "list.xml").read_text(encoding="utf-8")

    def test_error_exit_status(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bad.xml"
            path.write_text("<layout><data/><data/><View/></layout>", encoding="utf-8")
            status, out, err = self.run_main([str(path)])
        assert status == 1
        assert out == ""
        assert "bad.xml" in err

    def test_many_inputs_need_output_directory(self):
        with self.assertRaises(SystemExit) as ctx:
            self.run_main(["a.xml", "b.xml"])
        assert ctx.exception.code == 2
