# -*- coding: utf-8 -*-
"""Photo Panel v1.0 - Parametric panel + face images to STL and print texture"""
import io,base64,binascii,logging
from flask import Flask,request,jsonify,send_file
from flask_cors import CORS
from PIL import Image, UnidentifiedImageError

from photopanel import config as C
from photopanel.build import build_panel
from photopanel.dimensions import PanelSpec, parse_dimension, bevel, printable_area, screw_holes
from photopanel.export import export_zip, stl_bytes
from photopanel.layout import ImageSlot, LayoutMode, Margin, fit_margins, matched_height, matched_width
from photopanel.logging_config import setup_logging
from photopanel.raster import png_bytes
from photopanel.solid import build_panel_solid, mesh_buffers

app=Flask(__name__)
CORS(app)
setup_logging(C.LOG_LEVEL)
logger=logging.getLogger('photopanel.app')

# === PAYLOAD PARSING ===
TRUE_WORDS={'true','1','yes','on'};FALSE_WORDS={'false','0','no','off',''}

def parse_flag(d,key,default=False):
    """JSON bool, 0/1 or a form-style word ('true', 'off', ...); anything else is a 400."""
    v=d.get(key,default)
    if v is None:return default
    if isinstance(v,bool):return v
    if isinstance(v,(int,float)) and v in (0,1):return bool(v)
    w=v.strip().lower() if isinstance(v,str) else None
    if w in TRUE_WORDS:return True
    if w in FALSE_WORDS:return False
    raise ValueError(f"{key} must be true or false, got {v!r}")

def parse_spec(d):
    """PanelSpec from a JSON body; blank or non-numeric fields keep their defaults."""
    w=parse_dimension(d.get('width'),C.MIN_WIDTH);h=parse_dimension(d.get('height'),C.MIN_HEIGHT,C.MAX_HEIGHT)
    dp=parse_dimension(d.get('depth'),C.MIN_DEPTH,C.MAX_DEPTH)
    return PanelSpec(width=C.DEFAULT_WIDTH if w is None else w,height=C.DEFAULT_HEIGHT if h is None else h,
                     depth=C.DEFAULT_DEPTH if dp is None else dp,chamfer=parse_flag(d,'chamfer'),screw_holes=parse_flag(d,'screwHoles'))

def decode_image(data):
    if ',' in data:data=data.split(',')[1]
    try:
        raw=base64.b64decode(data,validate=True);img=Image.open(io.BytesIO(raw));img.load()
    except (binascii.Error,UnidentifiedImageError,OSError) as e:
        raise ValueError(f"Could not decode image: {e}") from e
    return img,raw

def parse_slots(d):
    entries=d.get('images') or []
    if len(entries)>C.MAX_SLOTS:raise ValueError(f"At most {C.MAX_SLOTS} images")
    slots=[]
    for i,e in enumerate(entries):
        e=e or {};img=raw=None
        if e.get('image'):img,raw=decode_image(e['image'])
        slots.append(ImageSlot(index=i,image=img,rotation=e.get('rotation',0),margin=Margin.from_dict(e.get('margin')),name=e.get('name',''),source=raw))
    return slots

def parse_mode(d):
    try:return LayoutMode(d.get('layout','horizontal'))
    except ValueError:raise ValueError(f"Unknown layout: {d.get('layout')}") from None

def parse_raster(d):
    ppi=parse_dimension(d.get('ppi'),1.0);mts=parse_dimension(d.get('maxTextureSize'),1.0)
    return (C.DEFAULT_PPI if ppi is None else ppi),(C.MAX_TEXTURE_SIZE if mts is None else int(mts))

def data_url(img):
    return 'data:image/png;base64,'+base64.b64encode(png_bytes(img)).decode('ascii') if img is not None else None

def derived(spec):
    pw,ph=printable_area(spec)
    return {'spec':spec.as_dict(),'bevel':bevel(spec),'printable':{'width':pw,'height':ph},
            'holes':[{'x':h.x,'y':h.y,'radius':h.radius} for h in screw_holes(spec)]}

def fail(e):
    if isinstance(e,ValueError):return jsonify({'error':str(e)}),400
    logger.exception("Request failed");return jsonify({'error':str(e)}),500

# === ROUTES ===
@app.route('/api/panel/dimensions',methods=['POST'])
def api_dimensions():
    try:
        return jsonify(derived(parse_spec(request.get_json(silent=True) or {})))
    except Exception as e:
        return fail(e)

@app.route('/api/panel/preview',methods=['POST'])
def api_preview():
    try:
        d=request.get_json(silent=True) or {};spec=parse_spec(d);ppi,mts=parse_raster(d)
        b=build_panel(spec,parse_slots(d),parse_mode(d),ppi,mts,show_holes=parse_flag(d,'showHoles',True))
        out=mesh_buffers(b.solid);out.update(derived(spec))
        out.update({'texture':data_url(b.texture),'mask':data_url(b.mask),'canvas':{'width':b.canvas[0],'height':b.canvas[1]},
                    'placements':[p.as_dict() for p in b.placements]})
        return jsonify(out)
    except Exception as e:
        return fail(e)

@app.route('/api/panel/match',methods=['POST'])
def api_match():
    try:
        d=request.get_json(silent=True) or {};spec=parse_spec(d);slots=parse_slots(d);mode=parse_mode(d);axis=d.get('axis','height')
        if axis=='height':spec=spec.evolve(height=matched_height(spec,slots,mode))
        elif axis=='width':spec=spec.evolve(width=matched_width(spec,slots,mode))
        else:raise ValueError(f"Unknown axis: {axis}")
        return jsonify(derived(spec))
    except Exception as e:
        return fail(e)

@app.route('/api/panel/fit-margins',methods=['POST'])
def api_fit_margins():
    try:
        d=request.get_json(silent=True) or {};spec=parse_spec(d);slots=parse_slots(d);i=int(d.get('index',0))
        if not 0<=i<len(slots):raise ValueError(f"No image slot {i}")
        m=fit_margins(spec,slots[i])
        return jsonify({'index':i,'margin':{'left':m.left,'right':m.right,'top':m.top,'bottom':m.bottom}})
    except Exception as e:
        return fail(e)

@app.route('/api/panel/stl',methods=['POST'])
def api_stl():
    try:
        spec=parse_spec(request.get_json(silent=True) or {})
        buf=io.BytesIO(stl_bytes(build_panel_solid(spec,force_holes=spec.screw_holes)));buf.seek(0)
        return send_file(buf,mimetype='model/stl',as_attachment=True,download_name='panel.stl')
    except Exception as e:
        return fail(e)

@app.route('/api/panel/export',methods=['POST'])
def api_export():
    try:
        d=request.get_json(silent=True) or {};ppi,mts=parse_raster(d)
        buf=io.BytesIO(export_zip(parse_spec(d),parse_slots(d),parse_mode(d),ppi,mts));buf.seek(0)
        return send_file(buf,mimetype='application/zip',as_attachment=True,download_name='panel_export.zip')
    except Exception as e:
        return fail(e)

@app.route('/api/health')
def health():
    return jsonify({'status':'ok','version':C.VERSION,'layouts':[m.value for m in LayoutMode]})

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=C.PORT)
