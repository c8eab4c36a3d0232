"""Tests for finding and replacing links inside HTML and markdown content."""

from core.link_rewriter import rewrite_links_in_content

REWRITES = {
    "/about": "[sitetree_link,id=42]",
    "/files/logo.gif": "/assets/logo.gif",
}


def rewrite(content, rewrites=REWRITES):
    seen = []

    def callback(url):
        seen.append(url)
        return rewrites.get(url)

    new_content, changed = rewrite_links_in_content(content, callback)
    return new_content, changed, seen


class TestHtmlLinks:

    def test_rewrites_anchor_href(self):
        content, changed, _ = rewrite('<a href="/about">About</a>')
        assert content == '<a href="[sitetree_link,id=42]">About</a>'
        assert changed is True

    def test_single_quotes_and_other_attributes(self):
        content, _, _ = rewrite("<a class='nav' href='/about' title=\"x\">About</a>")
        assert content == "<a class='nav' href='[sitetree_link,id=42]' title=\"x\">About</a>"

    def test_rewrites_image_src(self):
        content, _, _ = rewrite('<img alt="Logo" src="/files/logo.gif" />')
        assert content == '<img alt="Logo" src="/assets/logo.gif" />'

    def test_data_attributes_are_not_links(self):
        content, changed, seen = rewrite('<a data-href="/about">About</a>')
        assert changed is False
        assert seen == []

    def test_entities_are_decoded_for_the_callback(self):
        content, _, seen = rewrite('<a href="/search?a=1&amp;b=2">Go</a>', {"/search?a=1&b=2": "/find?a=1&b=2"})
        assert seen == ["/search?a=1&b=2"]
        assert content == '<a href="/find?a=1&amp;b=2">Go</a>'

    def test_every_link_is_visited_in_order(self):
        _, _, seen = rewrite('<a href="/one">1</a> <img src="/two"> <a href="/three">3</a>')
        assert seen == ["/one", "/three", "/two"]

    def test_unquoted_attributes(self):
        content, changed, seen = rewrite('<a href=/about>About</a> <img src=/files/logo.gif alt=Logo>')
        assert seen == ["/about", "/files/logo.gif"]
        assert content == '<a href=[sitetree_link,id=42]>About</a> <img src=/assets/logo.gif alt=Logo>'
        assert changed is True


class TestMarkdownLinks:

    def test_rewrites_link(self):
        content, changed, _ = rewrite("See [about us](/about) for more.")
        assert content == "See [about us]([sitetree_link,id=42]) for more."
        assert changed is True

    def test_rewrites_image_with_title(self):
        content, _, _ = rewrite('![Logo](/files/logo.gif "Our logo")')
        assert content == '![Logo](/assets/logo.gif "Our logo")'

    def test_linked_image_rewrites_both_urls(self):
        content, _, seen = rewrite("[![Logo](/files/logo.gif)](/about)")
        assert seen == ["/about", "/files/logo.gif"]
        assert content == "[![Logo](/assets/logo.gif)]([sitetree_link,id=42])"

    def test_linked_image_is_stable(self):
        once, _, _ = rewrite("[![Logo](/files/logo.gif)](/about)")
        twice, changed, _ = rewrite(once)
        assert twice == once
        assert changed is False

    def test_url_with_parentheses(self):
        content, _, seen = rewrite("[Foo](/wiki/Foo_(bar))", {"/wiki/Foo_(bar)": "[sitetree_link,id=5]"})
        assert seen == ["/wiki/Foo_(bar)"]
        assert content == "[Foo]([sitetree_link,id=5])"

    def test_unresolved_url_with_parentheses_is_left_alone(self):
        content, changed, _ = rewrite("[Foo](/wiki/Foo_(bar))")
        assert content == "[Foo](/wiki/Foo_(bar))"
        assert changed is False

    def test_text_after_link_in_parentheses(self):
        content, _, seen = rewrite("[about](/about) (see also)")
        assert seen == ["/about"]
        assert content == "[about]([sitetree_link,id=42]) (see also)"


class TestUnchangedContent:

    def test_unresolved_links_are_left_alone(self):
        original = '<a href="/old-page-never-imported">Old</a> and [old](/also-old)'
        content, changed, _ = rewrite(original)
        assert content == original
        assert changed is False

    def test_empty_content(self):
        assert rewrite_links_in_content("", lambda url: "x") == ("", False)
        assert rewrite_links_in_content(None, lambda url: "x") == (None, False)

    def test_rewritten_content_is_stable(self):
        once, _, _ = rewrite('<a href="/about">About</a> ![Logo](/files/logo.gif)')
        twice, changed, _ = rewrite(once)
        assert twice == once
        assert changed is False


class TestEncodedBrackets:

    def test_encoded_brackets_are_restored(self):
        content, changed, _ = rewrite('<a href="%5Bsitetree_link,id=3%5D">Home</a>')
        assert content == '<a href="[sitetree_link,id=3]">Home</a>'
        assert changed is True
