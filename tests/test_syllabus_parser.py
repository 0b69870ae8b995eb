from exam_blueprint.syllabus.parser import (
    MIN_TOPIC_LENGTH,
    clean_topic,
    extract_course_code,
    is_chapter_heading,
    parse_syllabus,
)


def test_parses_metadata_and_chapters(syllabus):
    assert syllabus.meta.course == "Data Structures"
    assert syllabus.meta.code == "CS301"
    assert syllabus.meta.description == "Core DS course"
    assert [c.name for c in syllabus.chapters] == ["UNIT 1: Arrays", "UNIT 2: Trees"]
    assert syllabus.chapters[0].topics == ["Linear arrays", "Multi-dim arrays"]
    assert syllabus.chapters[1].topics == ["Binary trees"]


def test_parsing_is_repeatable(sample_text):
    assert parse_syllabus(sample_text) == parse_syllabus(sample_text)


def test_empty_input_gives_empty_syllabus():
    for text in ("", None, "   \n\n\t\n"):
        result = parse_syllabus(text)
        assert result.meta.course == ""
        assert result.meta.code == ""
        assert result.chapters == []


def test_no_chapter_headings_drops_content():
    result = parse_syllabus("Physics\nPHY101\nIntro course\nNewton's laws of motion\nThermodynamics basics\n")
    assert result.meta.course == "Physics"
    assert result.chapters == []


def test_heading_right_after_metadata(long_syllabus):
    assert long_syllabus.meta.course == "Operating Systems"
    assert long_syllabus.meta.code == "CS402"
    assert long_syllabus.meta.description == "Processes, memory and storage."
    assert long_syllabus.chapter_names() == [
        "Module 1 - Processes",
        "Module 2 - Memory",
        "Module 3 - Storage",
        "Chapter notes",
    ]


def test_bullets_and_numbering_are_stripped(long_syllabus):
    assert long_syllabus.chapters[0].topics == [
        "Process states and transitions",
        "Context switching",
        "Scheduling algorithms",
    ]
    assert long_syllabus.chapters[1].topics == ["Paging and segmentation", "Virtual memory"]


def test_keyword_line_inside_chapter_opens_new_chapter(long_syllabus):
    # "Chapter notes" contains a keyword, so it is a chapter, not a topic
    storage, notes = long_syllabus.chapters[-2:]
    assert storage.name == "Module 3 - Storage"
    assert storage.topics == []
    assert notes.name == "Chapter notes"


def test_short_topics_are_dropped():
    text = "Course\nCODE1\nDesc\nUNIT 1\nStack\nQueues and deques\n- Heap.\n"
    result = parse_syllabus(text)
    assert result.chapters[0].topics == ["Queues and deques"]
    assert all(len(t) > MIN_TOPIC_LENGTH for t in result.chapters[0].topics)


def test_short_metadata_block_when_heading_comes_early():
    result = parse_syllabus("Algorithms\nUnit 1: Sorting\nMerge sort\nQuick sort\n")
    assert result.meta.course == "Algorithms"
    assert result.meta.code == ""
    assert result.meta.description == ""
    assert result.chapter_names() == ["Unit 1: Sorting"]
    assert result.chapters[0].topics == ["Merge sort", "Quick sort"]


def test_chapter_with_no_topics_is_kept():
    result = parse_syllabus("Course\nC1X\nDesc\nUNIT 1: Empty\nUNIT 2: Full\nSomething long\n")
    assert [c.topics for c in result.chapters] == [[], ["Something long"]]


def test_windows_line_endings():
    result = parse_syllabus("Course\r\nAB12\r\nDesc\r\nCHAPTER 1\r\nFirst topic here\r\n")
    assert result.meta.code == "AB12"
    assert result.chapters[0].topics == ["First topic here"]


def test_duplicate_chapter_names_are_not_merged():
    result = parse_syllabus("Course\nX\nY\nUNIT 1\nTopic one here\nUNIT 1\nTopic two here\n")
    assert result.chapter_names() == ["UNIT 1", "UNIT 1"]


def test_helpers():
    assert is_chapter_heading("unit 3: graphs")
    assert is_chapter_heading("Learning Module")
    assert not is_chapter_heading("Graph traversal")
    assert clean_topic("  3) Hash tables;") == "Hash tables"
    assert clean_topic("(a) Graphs") == "Graphs"
    assert clean_topic("1.2 Recursion") == "Recursion"
    assert clean_topic("• Sorting.") == "Sorting"
    assert clean_topic("3D graphics") == "3D graphics"
    assert clean_topic("8086 microprocessor architecture") == "8086 microprocessor architecture"
    assert clean_topic("802.11 wireless standards") == "802.11 wireless standards"
    assert clean_topic("2.3.1 Cache design") == "Cache design"
    assert clean_topic("(4) Pipelining") == "Pipelining"
    assert extract_course_code("Course Code: CS402") == "CS402"
    assert extract_course_code("no code here") == ""


def test_leading_numbers_in_topic_names_are_kept():
    result = parse_syllabus(
        "Microprocessors\nEC401\nDesc\nUNIT 1: Intel family\n"
        "8086 microprocessor architecture\n802.11 wireless standards\n1) Memory interfacing\n"
    )
    assert result.chapters[0].topics == [
        "8086 microprocessor architecture",
        "802.11 wireless standards",
        "Memory interfacing",
    ]
