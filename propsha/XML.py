#    propsha/XML.py - XML persistence for Propsha.
#    Copyright (C) 2009 Shawn Sulma <genosha@470th.org>
#
#    This program is free software: you can redistribute it and/or modify
#    it under the terms of the GNU General Public License as published by
#    the Free Software Foundation, either version 3 of the License, or
#    (at your option) any later version.
#
#    This program is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#    GNU General Public License for more details.
#
#    You should have received a copy of the GNU General Public License
#    along with this program.  If not, see <http://www.gnu.org/licenses/>.
r"""propsha/XML.py writes the properties of an object to an XML document and reads them
back into an object of the same shape.  It provides functions similar to those found in
:mod:`pickle` or :mod:`json` (marshal, unmarshal, dumps, dump, loads, load), and a
:class:`Mapper` bound to a single file.

Unlike :mod:`pickle`, nothing about the object's class is stored: loading needs an instance
to populate, which is handed back once its setters have been called.

The XML elements used in the representation are:

    <properties>...</properties> - the document root.
        contains one child per property.

    <name type='...' value='...'/> - a property ``name``, as exposed by ``getName`` or
        ``isName`` and restored through ``setName``.
        ``type`` - the property kind (see :mod:`propsha.codec`), or the name of an
            unsupported type (such properties are written but never read back)
        ``value`` - the textual value, for every kind except strings.

    <name type='java.lang.String'>...</name> - a string property; the value is the text of
        the element (plain or CDATA) so that markup characters survive.

For example::

    <?xml version='1.0' encoding='utf-8'?>
    <properties>
      <appName type="java.lang.String">Cinnamon &amp; Co.</appName>
      <port type="int" value="8080" />
      <started type="java.util.Date" value="2014-03-09T17:05:22.041-0600" />
    </properties>

Problems with a single property (no matching setter, text that does not parse, a setter that
raises, a name such as ``1st`` that cannot be an element) skip that property and carry on.
A value holding characters XML 1.0 cannot carry fails the whole document, before anything is
written.  Problems with the document as a whole are passed to the mapper's reporter rather
than raised.
"""
import logging, os, re
import xml.etree.ElementTree as ET
from inspect import Parameter

from propsha.accessors import find_setter, getters, setter_name
from propsha.codec import Kind, decode, encode, kind_of, type_name

__version__ = "0.1"
__author__ = "Shawn Sulma <genosha@470th.org>"
__all__ = [ 'marshal', 'unmarshal', 'dumps', 'dump', 'loads', 'load', 'Mapper', 'log_reporter' ]

ROOT = "properties"
TYPE = "type"
VALUE = "value"
INDENT = "  "
ENCODING = "utf-8"

_undeclared = Parameter.empty

# an element name, and the characters XML 1.0 cannot carry at all
_NAME = re.compile( r'[^\W\d][\w.-]*' )
_ILLEGAL = re.compile( '[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]' )

logger = logging.getLogger( __name__ )

def log_reporter ( severity, message, error = None ) :
    r"""The default reporter: hands document-level failures to this module's logger."""
    logger.log( severity, message, exc_info = error )

def marshal ( instance ) :
    r"""Builds the XML etree holding the properties of ``instance``."""
    root = ET.Element( ROOT )
    for name, getter, annotation in getters( instance ) :
        encode_property( root, name, getter, annotation )
    tree = ET.ElementTree( root )
    ET.indent( tree, space = INDENT )
    return tree

def unmarshal ( xmldoc, instance ) :
    r"""Populates ``instance`` from the XML etree (or root element) ``xmldoc``."""
    root = xmldoc.getroot() if hasattr( xmldoc, 'getroot' ) else xmldoc
    if root is None :
        return instance
    for element in root :
        if isinstance( element.tag, str ) : # skips comments and processing instructions
            decode_property( element, instance )
    return instance

def dumps ( instance ) :
    r"""Returns the XML document for ``instance`` as UTF-8 bytes."""
    return ET.tostring( marshal( instance ).getroot(), encoding = ENCODING, xml_declaration = True )

def dump ( instance, f ) :
    r"""Writes the XML document for ``instance`` to the binary file-like object (or the file
    name) ``f``."""
    marshal( instance ).write( f, encoding = ENCODING, xml_declaration = True )

def loads ( s, instance ) :
    r"""Populates ``instance`` from the XML document ``s`` (``str`` or ``bytes``)."""
    return unmarshal( ET.fromstring( s ), instance )

def load ( f, instance ) :
    r"""Populates ``instance`` from the XML document read from the file-like object (or the
    file name) ``f``."""
    return unmarshal( ET.parse( f ), instance )

def _render ( getter, kind ) :
    try :
        value = getter()
        if value is None :
            return ""
        return encode( kind, value ) if kind is not None else str( value )
    except Exception :
        logger.debug( "could not render %s", getter.__name__, exc_info = True )
        return ""

def _checked ( name, text ) :
    illegal = _ILLEGAL.search( text )
    if illegal :
        raise ValueError( "%s holds %r, which XML cannot represent" % ( name, illegal.group() ) )
    return text

def encode_property ( parent, name, getter, annotation ) :
    r"""Appends the element for property ``name`` to ``parent``.  Properties whose name is
    not an XML name are skipped; a value holding characters XML cannot carry raises
    ``ValueError`` so that no unreadable document is written."""
    if not _NAME.fullmatch( name ) :
        logger.debug( "%s is not an XML name, skipped", name )
        return None
    if annotation is _undeclared :
        return _encode_undeclared( parent, name, getter )
    kind = kind_of( annotation )
    text = _checked( name, _render( getter, kind ) )
    e = ET.SubElement( parent, name )
    e.set( TYPE, _checked( name, type_name( annotation ) ) )
    if kind is Kind.STRING :
        e.text = text
    else :
        e.set( VALUE, text )
    return e

def _encode_undeclared ( parent, name, getter ) :
    # without a return annotation the value's own class stands in for the declared type
    try :
        value = getter()
    except Exception :
        logger.debug( "could not read %s", getter.__name__, exc_info = True )
        value = None
    return encode_property( parent, name, lambda : value, type( value ) if value is not None else str )

def decode_property ( element, instance ) :
    name = element.get( TYPE, "" )
    if name == Kind.STRING.type_name :
        text = element.text or ""
    else :
        text = element.get( VALUE, "" )
    setter = find_setter( instance, setter_name( element.tag ), name )
    if setter is None :
        logger.debug( "no setter for <%s type=%r>", element.tag, name )
        return False
    value = decode( name, text )
    if value is None :
        logger.debug( "could not parse %r as %s for <%s>", text, name, element.tag )
        return False
    try :
        setter( value )
    except Exception :
        logger.debug( "%s(%r) failed", setter.__name__, value, exc_info = True )
        return False
    return True

class Mapper ( object ) :
    r"""Saves objects to, and loads them from, the XML file at ``path``.

    ``reporter`` is called as ``reporter( severity, message, error )`` when the document as a
    whole cannot be written (``logging.ERROR``) or read (``logging.WARNING``); it defaults to
    :func:`log_reporter`.  Nothing is read or written until :meth:`save` or :meth:`load`.

    A mapper holds no state besides its path, and does no locking: use one mapper per file,
    from one thread at a time."""
    def __init__ ( self, path, reporter = None ) :
        self._path = os.fspath( path )
        self.reporter = reporter or log_reporter

    @property
    def path ( self ) :
        return self._path

    def save ( self, instance ) :
        r"""Writes the properties of ``instance`` to the file.  Failures are reported, not
        raised.  A value XML cannot represent leaves the existing file alone; an I/O error
        may leave it partly written."""
        try :
            dump( instance, self._path )
        except ( OSError, ValueError, TypeError ) as ex :
            self.reporter( logging.ERROR, "could not save properties to %s" % self._path, ex )

    def load ( self, instance ) :
        r"""Populates ``instance`` from the file and returns it.  A missing file leaves it
        untouched, as does a file that cannot be read or parsed (which is reported)."""
        if not os.path.exists( self._path ) :
            return instance
        try :
            tree = ET.parse( self._path )
        except ( ET.ParseError, OSError, ValueError ) as ex :
            self.reporter( logging.WARNING, "could not load properties from %s" % self._path, ex )
            return instance
        return unmarshal( tree, instance )

    def __repr__ ( self ) :
        return "<Mapper: %s>" % self._path
