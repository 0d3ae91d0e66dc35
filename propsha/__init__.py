#    propsha/__init__.py - PROPerty marSHAller
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
r"""PROPSHA (PROPerty marSHAller) saves the properties of an object to an XML file and
loads them back, without any per-class serialization code.

Where :mod:`pickle` (or genosha) persists an object's whole state and rebuilds the object,
Propsha only persists what the object exposes through its accessors, and loading populates
an instance you supply.  The file is plain XML, easily edited by hand, and is the same format
used by existing property files of other tools: a ``<properties>`` root with one element per
property.

A class opts in by declaring conventionally named, annotated accessors::

    class Settings ( object ) :
        def __init__ ( self ) :
            self._name = "untitled"
            self._port = 80

        def getAppName ( self ) -> str :
            return self._name
        def setAppName ( self, name : str ) :
            self._name = name

        def getPort ( self ) -> int :
            return self._port
        def setPort ( self, port : int ) :
            self._port = port

and is persisted with a :class:`Mapper`::

    mapper = Mapper( "settings.xml" )
    mapper.save( settings )
    settings = mapper.load( Settings() )

The supported property types are booleans, integers of 8, 16, 32 and 64 bits, single and
double precision floats, dates and strings (see :mod:`propsha.codec`).  A getter of any
other type is still written, with its ``str()`` value, but is never read back.  Nested
objects and collections are not supported.

Loading is forgiving: elements without a matching setter, values that cannot be parsed and
setters that raise are skipped.  Saving and loading never raise for a bad file; failures go to
the mapper's reporter (by default the ``propsha.XML`` logger).
"""
from propsha.codec import Kind, Byte, Short, Long, Float, decode, encode
from propsha.accessors import overloads, setter_name, property_name, is_getter, find_setter
from propsha.XML import Mapper, log_reporter

__version__ = "0.1"
__author__ = "Shawn Sulma <genosha@470th.org>"
__all__ = [ 'Mapper', 'Kind', 'Byte', 'Short', 'Long', 'Float', 'overloads', 'log_reporter'
    , 'decode', 'encode', 'setter_name', 'property_name', 'is_getter', 'find_setter' ]
