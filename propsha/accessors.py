#    propsha/accessors.py - accessor naming conventions for Propsha.
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
r"""propsha/accessors.py finds the read and write accessors of an object by name.

A read accessor (getter) is a method named ``getXxx`` or ``isXxx`` that takes no arguments
besides ``self`` and is not annotated as returning ``None``.  The property it exposes is the
remainder of the name with its first character lower-cased: ``getAppName`` exposes
``appName`` and ``isActive`` exposes ``active``.  Only that first character is touched, so
``getURL`` exposes ``uRL``; documents already on disk depend on this, so it stays.

A write accessor (setter) for property ``xxx`` is a method named ``setXxx`` taking exactly
one argument besides ``self``, whose annotation selects the :class:`~propsha.codec.Kind`
it accepts.  Python methods cannot be overloaded on their argument type, so several setters
sharing a name are collected with :class:`overloads`.

Only the plain methods declared by the object's own class are considered.  Accessors
inherited from a base class are not, and neither are static methods, class methods or
properties, since none of them reads or writes the state of one instance.
"""
import functools, inspect, types, typing

from propsha.codec import Kind, kind_of

__version__ = "0.1"
__author__ = "Shawn Sulma <genosha@470th.org>"
__all__ = [ 'setter_name', 'property_name', 'is_getter', 'getters', 'parameter_kind', 'find_setter', 'overloads' ]

_missing = inspect.Parameter.empty

def setter_name ( name ) :
    r"""``id`` -> ``setId``.  An empty name gives just ``set``."""
    if not name :
        return "set"
    return "set" + name[0].upper() + name[1:]

def property_name ( getter_name ) :
    r"""``getId`` -> ``id``, ``isActive`` -> ``active``."""
    name = getter_name[2:] if getter_name.startswith( "is" ) else getter_name[3:]
    return name[:1].lower() + name[1:]

def _hints ( func ) :
    try :
        return typing.get_type_hints( func )
    except Exception : # unresolvable forward references; fall back to the raw annotations
        return dict( getattr( func, '__annotations__', None ) or {} )

def _parameters ( func ) :
    try :
        return list( inspect.signature( func ).parameters.values() )
    except ( TypeError, ValueError ) :
        return None

def is_getter ( method, name = None ) :
    r"""True if ``method`` is a read accessor, judged by its name (``name`` if given, since a
    class may bind a function under another name), its arguments and its return annotation."""
    if not inspect.isfunction( method ) :
        return False
    name = name or method.__name__
    if not ( name.startswith( "get" ) and len( name ) > 3 or name.startswith( "is" ) and len( name ) > 2 ) :
        return False
    params = _parameters( method )
    if params is None or len( params ) != 1 or params[0].kind not in ( inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD ) :
        return False
    return _hints( method ).get( 'return', _missing ) not in ( None, type( None ), 'None' )

def getters ( instance ) :
    r"""Yields ``( property name, bound getter, return annotation )`` for each read accessor
    declared by the class of ``instance``, in declaration order.  The annotation is
    ``inspect.Parameter.empty`` for unannotated getters."""
    for name, member in list( vars( type( instance ) ).items() ) :
        if is_getter( member, name ) :
            yield property_name( name ), types.MethodType( member, instance ), _hints( member ).get( 'return', _missing )

def parameter_kind ( func ) :
    r"""The kind accepted by the single value argument of ``func``, or None."""
    params = _parameters( func )
    if params is None or len( params ) != 2 :
        return None
    if any( p.kind not in ( inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD ) for p in params ) :
        return None
    annotation = _hints( func ).get( params[1].name, _missing )
    if annotation is _missing :
        return None
    return kind_of( annotation )

class overloads ( object ) :
    r"""Gathers several write accessors under one name, each accepting a different kind::

        class Account ( object ) :
            @overloads
            def setAmount ( self, amount : float ) :            # double
                self.amount = amount
            @setAmount.register
            def setAmount ( self, amount : Optional[float] ) :  # java.lang.Double
                self.boxed = amount

    When a document is loaded the variant whose kind matches the element's ``type`` is
    chosen.  Called directly, the first variant runs."""
    def __init__ ( self, func ) :
        if not inspect.isfunction( func ) :
            raise TypeError( "overloads expects a function, got %r" % ( func, ) )
        functools.update_wrapper( self, func )
        self.variants = [ func ]

    def register ( self, func ) :
        if not inspect.isfunction( func ) :
            raise TypeError( "overloads expects a function, got %r" % ( func, ) )
        self.variants.append( func )
        return self

    def variant ( self, kind ) :
        r"""The first registered function accepting ``kind``, or None."""
        for func in self.variants :
            if parameter_kind( func ) is kind :
                return func
        return None

    def __get__ ( self, instance, owner = None ) :
        if instance is None :
            return self
        return types.MethodType( self.variants[0], instance )

    def __repr__ ( self ) :
        return "<overloads %s: %d variants>" % ( self.__name__, len( self.variants ) )

def find_setter ( instance, name, type_name ) :
    r"""Returns the setter ``name`` of ``instance``, bound, if its class declares one taking
    exactly the kind called ``type_name``; otherwise None."""
    kind = Kind.named( type_name )
    if kind is None :
        return None
    member = vars( type( instance ) ).get( name )
    if isinstance( member, overloads ) :
        func = member.variant( kind )
    elif inspect.isfunction( member ) and parameter_kind( member ) is kind :
        func = member
    else :
        func = None
    return types.MethodType( func, instance ) if func is not None else None
