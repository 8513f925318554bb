"""Text bodies for the files written into a generated project."""

from __future__ import annotations

from typing import Mapping

__all__ = ["HG_IGNORE_SYNTAX", "IGNORE_PATTERNS", "TEMPLATES"]


COPYRIGHT_TEMPLATE = 'Copyright {{ year }}  The "{{ project_name }}" Authors'

COPYLEFT_TEMPLATE = 'Written in {{ year }} by the "{{ project_name }}" Authors'

HEADER_BSD = """{{ comment }} {{ copyright }}
{{ comment }}
{{ comment }} Use of this source code is governed by the {{ license_name }}
{{ comment }} that can be found in the LICENSE file.
{{ comment }}
{{ comment }} This software is distributed on an "AS IS" BASIS, WITHOUT WARRANTIES
{{ comment }} OR CONDITIONS OF ANY KIND, either express or implied. See the License
{{ comment }} for more details.
"""

HEADER_APACHE = """{{ comment }} {{ copyright }}
{{ comment }}
{{ comment }} Licensed under the Apache License, Version 2.0 (the "License");
{{ comment }} you may not use this file except in compliance with the License.
{{ comment }} You may obtain a copy of the License at
{{ comment }}
{{ comment }}     http://www.apache.org/licenses/LICENSE-2.0
{{ comment }}
{{ comment }} Unless required by applicable law or agreed to in writing, software
{{ comment }} distributed under the License is distributed on an "AS IS" BASIS,
{{ comment }} WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
{{ comment }} See the License for the specific language governing permissions and
{{ comment }} limitations under the License.
"""

HEADER_GNU = """{{ comment }} {{ copyright }}
{{ comment }}
{{ comment }} This program is free software: you can redistribute it and/or modify
{{ comment }} it under the terms of the GNU {{ gnu_extra }}General Public License as published by
{{ comment }} the Free Software Foundation, either version 3 of the License, or
{{ comment }} (at your option) any later version.
{{ comment }}
{{ comment }} This program is distributed in the hope that it will be useful,
{{ comment }} but WITHOUT ANY WARRANTY; without even the implied warranty of
{{ comment }} MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
{{ comment }} GNU {{ gnu_extra }}General Public License for more details.
{{ comment }}
{{ comment }} You should have received a copy of the GNU {{ gnu_extra }}General Public License
{{ comment }} along with this program.  If not, see <http://www.gnu.org/licenses/>.
"""

HEADER_MPL = """{{ comment }} {{ copyright }}
{{ comment }}
{{ comment }} This Source Code Form is subject to the terms of the Mozilla Public
{{ comment }} License, v. 2.0. If a copy of the MPL was not distributed with this
{{ comment }} file, You can obtain one at http://mozilla.org/MPL/2.0/.
"""

HEADER_CC0 = """{{ comment }} {{ copyright }}
{{ comment }}
{{ comment }} To the extent possible under law, the author(s) have waived all copyright
{{ comment }} and related or neighboring rights to this software to the public domain worldwide.
{{ comment }} This software is distributed without any warranty.
{{ comment }}
{{ comment }} You should have received a copy of the CC0 Public Domain Dedication along
{{ comment }} with this software. If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.
"""

HEADER_NONE = """{{ comment }} {{ copyright }}
"""

CMD_MAIN_TEMPLATE = """{{ header }}
package main

import (

)

func main() {

}
"""

PKG_MAIN_TEMPLATE = """{{ header }}
package {{ package_name }}
{{ cgo_import }}
import (

)
"""

TEST_TEMPLATE = """{{ header }}
package {{ package_name }}

import (
	"testing"
)

func Test(t *testing.T) {

}
"""

MAKEFILE_TEMPLATE = """{{ header }}
include $(GOROOT)/src/Make.inc

TARG={{ package_name }}
GOFILES=\\
	{{ package_name }}.go\\

include $(GOROOT)/src/Make.{{ make_kind }}
"""

README_TEMPLATE = """# {{ project_name }}

{{ summary }}

## Installation

    go get {{ package_name }}

## License

The source files are distributed under the {{ license_name }},
unless otherwise noted.
"""

NEWS_TEMPLATE = """# News for "{{ project_name }}"

Record here the notable changes of every release.
"""

CHANGES_TEMPLATE = """# Changes in "{{ project_name }}"

Record here the changes between releases; there is no version control
system to keep track of them.
"""

AUTHORS_TEMPLATE = """# Authors of "{{ project_name }}"

This is the official list of the copyright holders of "{{ project_name }}".
Names should be added to this file as

    Name or Organization <email address>

Please keep the list sorted.

{{ author_line }}
"""

AUTHORS_CC0_TEMPLATE = """# Dedicators of "{{ project_name }}"

This is the list of the people who have waived all copyright and related or
neighboring rights to "{{ project_name }}" under the CC0 Public Domain
Dedication. Names should be added to this file as

    Name <email address>

Please keep the list sorted.

{{ author_line }}
"""

CONTRIBUTORS_TEMPLATE = """# Contributors to "{{ project_name }}"

This is the list of the people who have contributed code to
"{{ project_name }}". Names should be added to this file as

    Name <email address>

Please keep the list sorted.

{{ contributors }}
"""

TEMPLATES: Mapping[str, str] = {
    "copyright": COPYRIGHT_TEMPLATE,
    "copyleft": COPYLEFT_TEMPLATE,
    "header_bsd": HEADER_BSD,
    "header_apache": HEADER_APACHE,
    "header_gnu": HEADER_GNU,
    "header_mpl": HEADER_MPL,
    "header_cc0": HEADER_CC0,
    "header_none": HEADER_NONE,
    "cmd_main": CMD_MAIN_TEMPLATE,
    "pkg_main": PKG_MAIN_TEMPLATE,
    "test": TEST_TEMPLATE,
    "makefile": MAKEFILE_TEMPLATE,
    "readme": README_TEMPLATE,
    "news": NEWS_TEMPLATE,
    "changes": CHANGES_TEMPLATE,
    "authors": AUTHORS_TEMPLATE,
    "authors_cc0": AUTHORS_CC0_TEMPLATE,
    "contributors": CONTRIBUTORS_TEMPLATE,
}

HG_IGNORE_SYNTAX = "syntax: glob\n"

IGNORE_PATTERNS = """# Generic
*~
[._]*

# Go
*.[ao]
*.[568vq]
[568vq].out
main

# Cgo
*.cgo*
*.so
"""
