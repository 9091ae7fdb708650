from sipflow.media import MEDIATYPELEN, Media, MediaFormat


def test_new_media_is_empty():
    msg = object()
    media = Media(msg)
    assert media.msg is msg
    assert media.formats == []
    assert media.type == ""


def test_set_type_short():
    media = Media()
    media.set_type("audio")
    assert media.type == "audio"


def test_set_type_truncates():
    media = Media()
    long_name = "x" * 40
    media.set_type(long_name)
    assert len(media.type) == MEDIATYPELEN - 1
    assert long_name.startswith(media.type)


def test_add_and_get_format():
    media = Media()
    media.add_format(101, "telephone-event/8000")
    media.add_format(96, "opus/48000/2")
    assert media.formats[0] == MediaFormat(101, "telephone-event/8000")
    assert media.get_format(96) == "opus/48000/2"
    assert media.get_format(101) == "telephone-event/8000"


def test_get_format_unassigned():
    media = Media()
    assert media.get_format(99) == "Unassigned"


def test_get_format_first_match_wins():
    media = Media()
    media.add_format(96, "first")
    media.add_format(96, "second")
    assert media.get_format(96) == "first"


def test_prefered_format_from_sdp():
    media = Media()
    media.add_format(96, "opus/48000/2")
    media.fmtcode = 96
    assert media.prefered_format() == "opus/48000/2"
    assert media.prefered_format({0: "g711u"}) == "opus/48000/2"


def test_prefered_format_standard_wins():
    media = Media()
    media.add_format(0, "described")
    media.fmtcode = 0
    assert media.prefered_format({0: "g711u"}) == "g711u"


def test_prefered_format_unassigned():
    media = Media()
    media.fmtcode = 120
    assert media.prefered_format({}) == "Unassigned"