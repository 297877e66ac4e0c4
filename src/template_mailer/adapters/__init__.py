"""Infrastructure behind the application ports.

* :mod:`.templates` - JSON template catalog and ``[mailer]`` settings
* :mod:`.sendgrid` - SendGrid v3 delivery over HTTP
* :mod:`.config` - layered configuration
* :mod:`.logging` - lib_log_rich setup
* :mod:`.memory` - in-memory doubles used by ``build_testing``
* :mod:`.cli` - the ``template-mailer`` command line
"""

from __future__ import annotations
